"""Attack definitions, including the optional single chained follow-up."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from miscrits_calc.config import DEFAULT_CHAINED_NAME
from miscrits_calc.engine.damage import coerce_number
from miscrits_calc.ir.aliases import resolve_aliases

DEFAULT_ATTACK_ELEMENT = "physical"

_ATTACK_ALIASES: dict[str, tuple[str, ...]] = {
    "ap": ("ap", "AP"),
    "true_damage": ("true_damage", "trueDamage", "extraDamage"),
    "chained": ("chained", "extra"),
}


class ChainedAttack(BaseModel):
    """A secondary attack resolved once after its parent.

    Chained attacks always deal exactly one hit and cannot chain further.
    """

    name: str = DEFAULT_CHAINED_NAME
    element: str | None = None
    """Lowercased element key.  ``None`` until the parent fills it in."""

    ap: int | float = 0

    @model_validator(mode="before")
    @classmethod
    def _resolve_aliases(cls, data: Any) -> Any:
        return resolve_aliases(data, {"ap": ("ap", "AP")}, skip_falsy=frozenset({"ap"}))

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, v: Any) -> str:
        return str(v) if v else DEFAULT_CHAINED_NAME

    @field_validator("element", mode="before")
    @classmethod
    def _lower_element(cls, v: Any) -> str | None:
        if not v:
            return None
        return str(v).strip().lower() or None

    @field_validator("ap", mode="before")
    @classmethod
    def _coerce_ap(cls, v: Any) -> int | float:
        return coerce_number(v)


class AttackDefinition(BaseModel):
    """One attack as listed on a miscrit.

    Legacy spellings (``AP``, ``extraDamage``, ``extra``) are folded onto
    the canonical fields when the record is validated.
    """

    name: str = ""
    element: str = DEFAULT_ATTACK_ELEMENT
    """Lowercased element key; ``physical`` when the source omits it."""

    ap: int | float = 0
    """Attack power."""

    hits: int = 1
    """Hits per use.  Stored as given; clamped to at least 1 when damage is computed."""

    true_damage: int | float = 0
    """Flat bonus added once to the final total, never per hit."""

    chained: ChainedAttack | None = None

    @model_validator(mode="before")
    @classmethod
    def _resolve_aliases(cls, data: Any) -> Any:
        return resolve_aliases(
            data, _ATTACK_ALIASES, skip_falsy=frozenset({"ap", "chained"})
        )

    @field_validator("name", mode="before")
    @classmethod
    def _stringify_name(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("element", mode="before")
    @classmethod
    def _lower_element(cls, v: Any) -> str:
        if not v:
            return DEFAULT_ATTACK_ELEMENT
        return str(v).strip().lower() or DEFAULT_ATTACK_ELEMENT

    @field_validator("ap", "true_damage", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> int | float:
        return coerce_number(v)

    @field_validator("hits", mode="before")
    @classmethod
    def _coerce_hits(cls, v: Any) -> int:
        return int(coerce_number(v)) or 1

    @field_validator("chained", mode="before")
    @classmethod
    def _drop_malformed_chain(cls, v: Any) -> Any:
        if isinstance(v, (dict, ChainedAttack)):
            return v
        return None

    @model_validator(mode="after")
    def _inherit_chained_element(self) -> "AttackDefinition":
        """A chained attack without its own element uses the parent's."""
        if self.chained is not None and self.chained.element is None:
            self.chained = self.chained.model_copy(update={"element": self.element})
        return self

    @property
    def sort_key(self) -> int | float:
        """Total attack power across hits, used to order attack lists."""
        return self.ap * self.hits
