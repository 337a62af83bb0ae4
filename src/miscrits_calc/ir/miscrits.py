"""Miscrit (creature) definitions and the persisted custom-variant record."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from miscrits_calc.config import DEFAULT_STATS
from miscrits_calc.engine.elements import normalize_elements
from miscrits_calc.ir.aliases import resolve_aliases
from miscrits_calc.ir.attacks import AttackDefinition
from miscrits_calc.ir.stats import StatBlock

AttackTab = Literal["base", "enhanced"]

_MISCRIT_ALIASES: dict[str, tuple[str, ...]] = {
    "elements": ("elements", "type", "element"),
    "enhanced_attacks": ("enhanced_attacks", "enhancedAttacks"),
    "base_name": ("base_name", "baseName"),
    "is_custom": ("is_custom", "isCustom"),
}


class MiscritDefinition(BaseModel):
    """Complete definition of a single miscrit.

    Custom miscrits are user-authored variants of a base miscrit: they carry
    the base's elements and attacks with their own name and stats, and
    ``base_name`` points back at the base entry.
    """

    name: str
    """Unique within the loaded collection."""

    elements: list[str] = []
    """Canonical lowercase element keys (see :func:`normalize_elements`)."""

    stats: StatBlock = Field(default_factory=lambda: StatBlock(**DEFAULT_STATS))
    attacks: list[AttackDefinition] = []
    enhanced_attacks: list[AttackDefinition] = []

    base_name: str | None = None
    """Name of the base miscrit this one derives from, for custom entries."""

    is_custom: bool = False

    @model_validator(mode="before")
    @classmethod
    def _resolve_aliases(cls, data: Any) -> Any:
        return resolve_aliases(data, _MISCRIT_ALIASES, skip_falsy=frozenset({"elements"}))

    @field_validator("elements", mode="before")
    @classmethod
    def _normalize_elements(cls, v: Any) -> list[str]:
        return normalize_elements(v)

    @field_validator("stats", mode="before")
    @classmethod
    def _default_stats(cls, v: Any) -> Any:
        if not v:
            return dict(DEFAULT_STATS)
        return v

    @field_validator("attacks", "enhanced_attacks", mode="before")
    @classmethod
    def _drop_malformed_attacks(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [a for a in v if isinstance(a, (dict, AttackDefinition))]

    def attacks_for(self, tab: AttackTab = "base") -> list[AttackDefinition]:
        """Return the base or enhanced attack list, unsorted."""
        if tab == "enhanced":
            return list(self.enhanced_attacks)
        return list(self.attacks)

    def derive_custom(self, name: str, stats: StatBlock) -> "MiscritDefinition":
        """Build a custom variant of this miscrit with its own name and stats."""
        return self.model_copy(
            update={
                "name": name,
                "stats": stats.model_copy(),
                "base_name": self.name,
                "is_custom": True,
            }
        )


class CustomMiscritRecord(BaseModel):
    """The persisted form of a custom miscrit: ``{name, baseName, stats}``.

    Elements and attacks are not stored; they are taken from the base
    miscrit each time the record is reconstructed.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    base_name: str = Field(alias="baseName")
    stats: StatBlock

    @classmethod
    def from_miscrit(cls, miscrit: MiscritDefinition) -> "CustomMiscritRecord":
        return cls(
            name=miscrit.name,
            base_name=miscrit.base_name or "",
            stats=miscrit.stats.model_copy(),
        )
