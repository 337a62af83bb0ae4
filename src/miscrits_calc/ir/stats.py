"""The six-stat block shared by entity definitions and working snapshots."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from miscrits_calc.engine.damage import coerce_number

# Display key -> field name
_STAT_FIELDS: dict[str, str] = {
    "PA": "pa",
    "EA": "ea",
    "PD": "pd",
    "ED": "ed",
    "SPD": "spd",
    "HP": "hp",
}


class StatBlock(BaseModel):
    """Physical/elemental attack and defence, speed and hit points.

    Serialises with the upper-case keys used by the game data
    (``PA``, ``EA``, ``PD``, ``ED``, ``SPD``, ``HP``).  Malformed values
    are coerced to 0 rather than rejected.
    """

    model_config = ConfigDict(populate_by_name=True)

    pa: int | float = Field(0, alias="PA")
    ea: int | float = Field(0, alias="EA")
    pd: int | float = Field(0, alias="PD")
    ed: int | float = Field(0, alias="ED")
    spd: int | float = Field(0, alias="SPD")
    hp: int | float = Field(0, alias="HP")

    @field_validator("pa", "ea", "pd", "ed", "spd", "hp", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> int | float:
        return coerce_number(v)

    def get(self, key: str) -> int | float:
        """Return a stat by display key (``"PA"``) or field name (``"pa"``)."""
        return getattr(self, _STAT_FIELDS.get(key, key))

    def with_overrides(self, **stats: Any) -> "StatBlock":
        """Return a copy with the given stats replaced.

        Keys may be display keys or field names.
        """
        update: dict[str, int | float] = {}
        for key, value in stats.items():
            field = _STAT_FIELDS.get(key, key)
            if field not in _STAT_FIELDS.values():
                raise KeyError(f"Unknown stat {key!r}")
            update[field] = coerce_number(value)
        return self.model_copy(update=update)

    def to_display(self) -> dict[str, int | float]:
        """Stats keyed by their upper-case display names."""
        return self.model_dump(by_alias=True)
