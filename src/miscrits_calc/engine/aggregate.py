"""Aggregate damage: hit counts, chained follow-ups and true damage.

:func:`compute_result` resolves the selected attack (and its chained
follow-up, if any) against the defender and returns a
:class:`DamageResult`.  Totals with true damage, the combined main+chained
total and hits-to-KO are derived from that result on demand.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from miscrits_calc.config import DEFAULT_CHAINED_NAME

from .damage import (
    DamageRange,
    PerHitDamage,
    add_true_damage,
    atk_def_ratio,
    clamp_hits,
    coerce_number,
    compute_per_hit,
    hits_to_ko,
    scale_range,
    sum_ranges,
)
from .elements import NON_ELEMENTAL, element_multiplier

if TYPE_CHECKING:
    from miscrits_calc.ir.attacks import AttackDefinition
    from miscrits_calc.ir.stats import StatBlock


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------

class MainDamage(BaseModel):
    """Damage of the selected attack across all its hits."""

    model_config = ConfigDict(populate_by_name=True)

    per: PerHitDamage
    hits: int
    total: DamageRange
    elem_mul: float = Field(serialization_alias="elemMul")
    atk_def_ratio: str = Field(serialization_alias="atkDefRatio")
    element: str


class ChainedDamage(BaseModel):
    """Damage of the single chained follow-up hit."""

    model_config = ConfigDict(populate_by_name=True)

    per: PerHitDamage
    elem_mul: float = Field(serialization_alias="elemMul")
    atk_def_ratio: str = Field(serialization_alias="atkDefRatio")
    element: str
    ap: int | float
    name: str


class DamageResult(BaseModel):
    """Engine output for one attacker/defender/attack combination.

    ``model_dump(by_alias=True)`` gives the presentation shape
    ``{main: {...}, extra: {...} | None}``.
    """

    main: MainDamage
    extra: ChainedDamage | None = None
    true_damage: int | float = Field(0, exclude=True)
    """Flat bonus of the selected (parent) attack."""

    def main_with_true_damage(self) -> DamageRange | None:
        return add_true_damage(self.main.total, self.true_damage)

    def combined_total(self) -> DamageRange | None:
        """Main total plus the chained hit, or ``None`` without a chain."""
        if self.extra is None:
            return None
        return sum_ranges(self.main.total, self.extra.per)

    def combined_with_true_damage(self) -> DamageRange | None:
        combined = self.combined_total()
        if combined is None:
            return None
        return add_true_damage(combined, self.true_damage)

    def hits_to_ko(self, defender_hp: Any) -> int | None:
        """Uses/turns of the main attack needed to KO, from its average with true damage."""
        with_td = self.main_with_true_damage()
        avg = with_td.avg if with_td is not None else self.main.total.avg
        return hits_to_ko(defender_hp, avg)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def is_physical(element: Any) -> bool:
    """Physical and neutral attacks read PA/PD; everything else EA/ED."""
    return str(element or "").strip().lower() in NON_ELEMENTAL


def _read_stat(stats: Any, key: str) -> int | float:
    if stats is None:
        return 0
    if isinstance(stats, Mapping):
        return coerce_number(stats.get(key.upper(), stats.get(key)))
    return coerce_number(getattr(stats, key, 0))


def stat_pair(element: Any, attacker: Any, defender: Any) -> tuple[int | float, int | float]:
    """Return the (attacker stat, defender stat) pair an element reads."""
    if is_physical(element):
        return _read_stat(attacker, "pa"), _read_stat(defender, "pd")
    return _read_stat(attacker, "ea"), _read_stat(defender, "ed")


def true_damage_of(attack: Any) -> int | float:
    """Flat true-damage bonus of *attack*; 0 when absent or malformed."""
    return coerce_number(getattr(attack, "true_damage", 0))


def _resolve_hit(
    element: str,
    ap: Any,
    attacker: Any,
    defender: Any,
    defender_elements: Any,
) -> tuple[PerHitDamage, float, str]:
    multiplier = element_multiplier(element, defender_elements)
    atk_stat, def_stat = stat_pair(element, attacker, defender)
    per = compute_per_hit(ap, atk_stat, def_stat, multiplier)
    return per, multiplier, atk_def_ratio(atk_stat, def_stat)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def compute_result(
    attack: AttackDefinition,
    attacker_stats: StatBlock | Mapping[str, Any] | None,
    defender_stats: StatBlock | Mapping[str, Any] | None,
    defender_elements: Any,
) -> DamageResult:
    """Resolve *attack* from the attacker's snapshot against the defender's.

    Steps:
        1. Pick PA/PD for physical or neutral attacks, EA/ED otherwise
        2. Elemental multiplier against the defender's elements
        3. Per-hit range, then scale by the hit count (never below 1)
        4. The chained follow-up, if any, is resolved independently as one hit
    """
    element = str(getattr(attack, "element", "") or "physical").lower()
    hits = clamp_hits(getattr(attack, "hits", 1))

    per, multiplier, ratio = _resolve_hit(
        element,
        getattr(attack, "ap", 0),
        attacker_stats,
        defender_stats,
        defender_elements,
    )
    main = MainDamage(
        per=per,
        hits=hits,
        total=scale_range(per, hits),
        elem_mul=multiplier,
        atk_def_ratio=ratio,
        element=element,
    )

    extra = None
    chained = getattr(attack, "chained", None)
    if chained is not None:
        ch_element = str(getattr(chained, "element", None) or element).lower()
        ch_ap = coerce_number(getattr(chained, "ap", 0))
        ch_per, ch_multiplier, ch_ratio = _resolve_hit(
            ch_element, ch_ap, attacker_stats, defender_stats, defender_elements
        )
        extra = ChainedDamage(
            per=ch_per,
            elem_mul=ch_multiplier,
            atk_def_ratio=ch_ratio,
            element=ch_element,
            ap=ch_ap,
            name=getattr(chained, "name", None) or DEFAULT_CHAINED_NAME,
        )

    return DamageResult(main=main, extra=extra, true_damage=true_damage_of(attack))
