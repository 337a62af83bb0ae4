"""Average-tier defence remap used for what-if comparisons.

Only the defender's working PD/ED snapshot is ever remapped; base entity
stats are left alone so switching the remap off re-reads them unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .damage import coerce_number

if TYPE_CHECKING:
    from miscrits_calc.ir.stats import StatBlock

# Tables are kept in ascending key order; nearest-key ties go to the lower key.
ELEMENTAL_DEFENSE_TIERS: dict[int, int] = {60: 85, 72: 99, 83: 112, 95: 127, 107: 141}
PHYSICAL_DEFENSE_TIERS: dict[int, int] = {60: 78, 72: 93, 83: 108, 95: 124, 107: 139}


def _table_for(kind: str) -> dict[int, int]:
    if str(kind).upper() == "ED":
        return ELEMENTAL_DEFENSE_TIERS
    return PHYSICAL_DEFENSE_TIERS


def remap_defense(value: Any, kind: str) -> Any:
    """Map a defence stat onto its average-tier value.

    *kind* is ``"ED"`` for elemental defence; anything else uses the
    physical table.  Exact keys map directly, other values use the nearest
    key, and ``None`` passes through.
    """
    if value is None:
        return None
    table = _table_for(kind)
    number = coerce_number(value)
    if number in table:
        return table[number]

    keys = sorted(table)
    best = keys[0]
    best_diff = abs(number - best)
    for key in keys[1:]:
        diff = abs(number - key)
        if diff < best_diff:
            best, best_diff = key, diff
    return table[best]


def apply_avg_tier(snapshot: StatBlock, base: StatBlock) -> StatBlock:
    """Return *snapshot* with PD/ED replaced by the remap of *base*'s PD/ED."""
    return snapshot.model_copy(
        update={
            "pd": remap_defense(base.pd, "PD"),
            "ed": remap_defense(base.ed, "ED"),
        }
    )
