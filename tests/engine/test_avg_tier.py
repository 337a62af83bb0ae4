"""Tests for the average-tier defence remap."""

import pytest

from miscrits_calc.engine.avg_tier import (
    ELEMENTAL_DEFENSE_TIERS,
    PHYSICAL_DEFENSE_TIERS,
    apply_avg_tier,
    remap_defense,
)
from miscrits_calc.ir.stats import StatBlock


class TestRemapDefense:
    @pytest.mark.parametrize("value,expected", list(ELEMENTAL_DEFENSE_TIERS.items()))
    def test_exact_elemental(self, value, expected):
        assert remap_defense(value, "ED") == expected

    @pytest.mark.parametrize("value,expected", list(PHYSICAL_DEFENSE_TIERS.items()))
    def test_exact_physical(self, value, expected):
        assert remap_defense(value, "PD") == expected

    def test_nearest_key(self):
        # |65-60| = 5 < |65-72| = 7
        assert remap_defense(65, "ED") == 85

    def test_tie_goes_to_lower_key(self):
        # 66 is 6 away from both 60 and 72
        assert remap_defense(66, "ED") == 85
        assert remap_defense(66, "PD") == 78

    def test_out_of_range(self):
        assert remap_defense(200, "PD") == 139
        assert remap_defense(0, "PD") == 78

    def test_float_exact_key(self):
        assert remap_defense(72.0, "ED") == 99

    def test_none_passes_through(self):
        assert remap_defense(None, "PD") is None


class TestApplyAvgTier:
    def test_remaps_from_base_not_snapshot(self):
        snapshot = StatBlock(PA=1, EA=2, PD=999, ED=999, SPD=3, HP=50)
        base = StatBlock(PA=60, EA=60, PD=72, ED=83, SPD=60, HP=153)

        result = apply_avg_tier(snapshot, base)

        assert result.pd == 93
        assert result.ed == 112
        assert (result.pa, result.ea, result.spd, result.hp) == (1, 2, 3, 50)

    def test_inputs_untouched(self):
        snapshot = StatBlock(PD=60, ED=60)
        base = StatBlock(PD=60, ED=60)
        apply_avg_tier(snapshot, base)
        assert snapshot.pd == 60 and snapshot.ed == 60
        assert base.pd == 60 and base.ed == 60
