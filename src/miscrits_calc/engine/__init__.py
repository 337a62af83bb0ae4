"""Pure damage engine: element handling, per-hit model, aggregation.

Re-exports the primary functions from each engine module for convenience.

Usage::

    from miscrits_calc.engine import (
        normalize_elements, element_multiplier,
        compute_per_hit, compute_result,
        remap_defense, apply_avg_tier,
    )
"""

# -- elements ----------------------------------------------------------------
from .elements import (
    KNOWN_ELEMENTS,
    STRONG_AGAINST,
    element_multiplier,
    normalize_elements,
    strong_against,
    weak_against,
)

# -- damage ------------------------------------------------------------------
from .damage import (
    DamageRange,
    PerHitDamage,
    add_true_damage,
    coerce_number,
    compute_per_hit,
    hits_to_ko,
    scale_range,
    sum_ranges,
)

# -- aggregate ---------------------------------------------------------------
from .aggregate import (
    ChainedDamage,
    DamageResult,
    MainDamage,
    compute_result,
    is_physical,
    stat_pair,
    true_damage_of,
)

# -- avg tier ----------------------------------------------------------------
from .avg_tier import apply_avg_tier, remap_defense

__all__ = [
    # elements
    "KNOWN_ELEMENTS",
    "STRONG_AGAINST",
    "element_multiplier",
    "normalize_elements",
    "strong_against",
    "weak_against",
    # damage
    "DamageRange",
    "PerHitDamage",
    "add_true_damage",
    "coerce_number",
    "compute_per_hit",
    "hits_to_ko",
    "scale_range",
    "sum_ranges",
    # aggregate
    "ChainedDamage",
    "DamageResult",
    "MainDamage",
    "compute_result",
    "is_physical",
    "stat_pair",
    "true_damage_of",
    # avg tier
    "apply_avg_tier",
    "remap_defense",
]
