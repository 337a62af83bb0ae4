"""Per-hit damage model and min/avg/max range arithmetic.

Pipeline for one hit::

    raw = ap * (attacker_stat / max(1, defender_stat)) * multiplier
    min = floor(raw * 0.9)   avg = round(raw)   max = ceil(raw * 1.1)

Arithmetic is done on exact fractions so the +/-10% band lands on whole
numbers when it should (``100 * 1.1`` is 110, not 110.00000000000001).
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Any

from pydantic import BaseModel

MIN_ROLL = Fraction(9, 10)
MAX_ROLL = Fraction(11, 10)


def coerce_number(value: Any) -> int | float:
    """Coerce *value* to a finite number, falling back to 0.

    Accepts ints, floats and numeric strings.  ``None``, empty strings,
    unparsable text, NaN and infinities all become 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError:
            return 0
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value) if value.is_integer() else value
    return 0


def _exact(value: Any) -> Fraction:
    return Fraction(str(coerce_number(value)))


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


class DamageRange(BaseModel):
    """An ordered (min, avg, max) damage estimate."""

    min: int = 0
    avg: int = 0
    max: int = 0


class PerHitDamage(DamageRange):
    """Single-hit estimate plus the unrounded expected value."""

    raw: float = 0.0


def compute_per_hit(
    ap: Any,
    attacker_stat: Any,
    defender_stat: Any,
    multiplier: Any,
) -> PerHitDamage:
    """Compute the damage range of a single hit.

    The defender stat is floored at 1 so a zero or negative defence never
    divides by zero or flips the sign.
    """
    defence = max(Fraction(1), _exact(defender_stat))
    raw = _exact(ap) * (_exact(attacker_stat) / defence) * _exact(multiplier)
    return PerHitDamage(
        min=math.floor(raw * MIN_ROLL),
        avg=_round_half_up(raw),
        max=math.ceil(raw * MAX_ROLL),
        raw=float(raw),
    )


def atk_def_ratio(attacker_stat: Any, defender_stat: Any) -> str:
    """Attacker/defender stat quotient formatted to two decimals."""
    defence = max(1, coerce_number(defender_stat))
    return f"{coerce_number(attacker_stat) / defence:.2f}"


def clamp_hits(hits: Any) -> int:
    """Hit count as a whole number, never below 1."""
    return max(1, int(coerce_number(hits)))


def scale_range(damage: DamageRange, hits: Any) -> DamageRange:
    """Multiply each component of *damage* by the clamped hit count."""
    n = clamp_hits(hits)
    return DamageRange(min=damage.min * n, avg=damage.avg * n, max=damage.max * n)


def sum_ranges(a: DamageRange, b: DamageRange) -> DamageRange:
    """Pairwise sum of two ranges."""
    return DamageRange(min=a.min + b.min, avg=a.avg + b.avg, max=a.max + b.max)


def add_true_damage(damage: DamageRange, true_damage: Any) -> DamageRange | None:
    """Add a flat bonus once to each component of *damage*.

    Returns ``None`` when there is no bonus to add.
    """
    bonus = _exact(true_damage)
    if not bonus:
        return None
    return DamageRange(
        min=_round_half_up(damage.min + bonus),
        avg=_round_half_up(damage.avg + bonus),
        max=_round_half_up(damage.max + bonus),
    )


def hits_to_ko(defender_hp: Any, average_damage: Any) -> int | None:
    """Number of average hits needed to deplete *defender_hp*.

    ``None`` when the average is not positive or the defender has no HP.
    """
    avg = _exact(average_damage)
    hp = _exact(defender_hp)
    if avg <= 0 or hp <= 0:
        return None
    return math.ceil(hp / avg)
