"""Tests for the one-pass calculator pipeline."""

from __future__ import annotations

from miscrits_calc.engine.damage import DamageRange
from miscrits_calc.ir.stats import StatBlock
from miscrits_calc.pipeline import (
    CalculatorInputs,
    evaluate,
    refresh,
    select_attacker,
    select_defender,
    select_miscrit,
    set_avg_def,
    set_stat,
    sorted_attacks,
    swap_roles,
    sync_selected_attack,
)


def _inputs(**kwargs) -> CalculatorInputs:
    return CalculatorInputs(**kwargs)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

class TestSelection:
    def test_default_attacker_is_first(self, miscrits):
        assert select_attacker(miscrits, "").name == "Flue"

    def test_default_defender_is_second(self, miscrits):
        assert select_defender(miscrits, "").name == "Sparkion"

    def test_single_entry_defender(self, miscrits):
        assert select_defender(miscrits[:1], "").name == "Flue"

    def test_named(self, miscrits):
        assert select_attacker(miscrits, "Aria").name == "Aria"
        assert select_defender(miscrits, "Dorux").name == "Dorux"

    def test_unknown_name_falls_back(self, miscrits):
        assert select_attacker(miscrits, "Nobody").name == "Flue"

    def test_custom_only_without_customs(self, miscrits):
        assert select_attacker(miscrits, "Flue", custom_only=True) is None

    def test_custom_only(self, miscrits):
        custom = miscrits[0].derive_custom("Fast Flue", StatBlock(SPD=150))
        listed = [*miscrits, custom]
        assert select_attacker(listed, "Flue", custom_only=True).name == "Fast Flue"

    def test_empty(self):
        assert select_attacker([], "") is None
        assert select_defender([], "") is None


class TestAttackList:
    def test_sorted_by_total_power(self, miscrits):
        flue = miscrits[0]
        assert [a.name for a in sorted_attacks(flue)] == ["Fire Fang", "Ember", "Scratch"]

    def test_enhanced_tab(self, miscrits):
        assert [a.name for a in sorted_attacks(miscrits[0], "enhanced")] == ["Inferno"]

    def test_no_miscrit(self):
        assert sorted_attacks(None) == []

    def test_keeps_previous_selection(self, miscrits):
        attacks = sorted_attacks(miscrits[0])
        assert sync_selected_attack(attacks, "Scratch").name == "Scratch"

    def test_falls_back_to_first(self, miscrits):
        attacks = sorted_attacks(miscrits[0])
        assert sync_selected_attack(attacks, "Gone").name == "Fire Fang"
        assert sync_selected_attack(attacks, None).name == "Fire Fang"
        assert sync_selected_attack([], "Scratch") is None


# ---------------------------------------------------------------------------
# evaluate
# ---------------------------------------------------------------------------

class TestEvaluate:
    def test_snapshots_seeded_from_base(self, miscrits):
        view = evaluate(miscrits, _inputs(attacker_name="Flue", defender_name="Dorux"))
        assert view.attacker_stats == miscrits[0].stats
        assert view.defender_stats == miscrits[2].stats
        assert view.attacker_stats is not miscrits[0].stats

    def test_elemental_attack(self, miscrits):
        view = evaluate(
            miscrits,
            _inputs(attacker_name="Flue", defender_name="Dorux", selected_attack="Ember"),
        )
        # fire beats nature; EA 95 vs ED 95
        assert view.result.main.elem_mul == 2
        assert view.result.main.total == DamageRange(min=54, avg=60, max=66)
        assert view.hits_to_ko == 3  # ceil(170 / 60)
        assert view.main_with_true_damage is None

    def test_chained_attack_with_true_damage(self, miscrits):
        view = evaluate(
            miscrits,
            _inputs(attacker_name="Sparkion", defender_name="Aria", selected_attack="Static Burst"),
        )
        assert view.result.main.elem_mul == 2
        assert view.result.main.total == DamageRange(min=34, avg=38, max=43)
        assert view.result.extra.name == "Aftershock"
        assert view.main_with_true_damage == DamageRange(min=38, avg=42, max=47)
        assert view.combined_total == DamageRange(min=43, avg=48, max=54)
        assert view.combined_with_true_damage == DamageRange(min=47, avg=52, max=58)
        assert view.hits_to_ko == 4  # ceil(146 / 42)

    def test_default_attack_is_strongest(self, miscrits):
        view = evaluate(miscrits, _inputs())
        assert view.selected_attack.name == "Fire Fang"
        assert view.result.main.hits == 2

    def test_edited_snapshot_used(self, miscrits):
        inputs = _inputs(attacker_name="Flue", defender_name="Dorux", selected_attack="Ember")
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "attacker", view, "EA", 190)
        view = evaluate(miscrits, inputs)

        assert view.attacker_stats.ea == 190
        assert view.result.main.total.avg == 120
        assert miscrits[0].stats.ea == 95

    def test_zero_hp_defender_has_no_ko(self, miscrits):
        inputs = _inputs(attacker_name="Flue", defender_name="Dorux")
        view = evaluate(miscrits, inputs)
        view = evaluate(miscrits, set_stat(inputs, "defender", view, "HP", 0))
        assert view.hits_to_ko is None

    def test_no_miscrits(self):
        view = evaluate([], _inputs())
        assert view.attacker is None
        assert view.result is None
        assert view.attacks == []

    def test_attacker_without_attacks(self, miscrits):
        bare = miscrits[0].model_copy(update={"name": "Bare", "attacks": []})
        view = evaluate([bare, *miscrits], _inputs(attacker_name="Bare"))
        assert view.selected_attack is None
        assert view.result is None


class TestAvgTier:
    def test_remaps_defender_defences(self, miscrits):
        inputs = _inputs(attacker_name="Flue", defender_name="Dorux", selected_attack="Ember", avg_def=True)
        view = evaluate(miscrits, inputs)

        assert view.defender_stats.pd == 139
        assert view.defender_stats.ed == 127
        assert view.result.main.total == DamageRange(min=40, avg=45, max=50)

    def test_toggle_off_restores_base(self, miscrits):
        inputs = _inputs(attacker_name="Flue", defender_name="Dorux", avg_def=True)
        view = evaluate(miscrits, inputs)
        view = evaluate(miscrits, set_avg_def(inputs, view, False))

        assert view.defender_stats.pd == 107
        assert view.defender_stats.ed == 95
        assert miscrits[2].stats.pd == 107

    def test_toggle_off_after_edit_restores_base(self, miscrits):
        inputs = _inputs(defender_name="Dorux", avg_def=True)
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "defender", view, "HP", 500)
        view = evaluate(miscrits, inputs)
        assert (view.defender_stats.pd, view.defender_stats.ed) == (139, 127)

        inputs = set_avg_def(inputs, view, False)
        view = evaluate(miscrits, inputs)

        assert not inputs.avg_def
        assert (view.defender_stats.pd, view.defender_stats.ed) == (107, 95)
        assert view.defender_stats.hp == 170

    def test_defence_edit_kept_while_enabled(self, miscrits):
        inputs = _inputs(defender_name="Dorux", avg_def=True)
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "defender", view, "PD", 10)
        view = evaluate(miscrits, inputs)

        assert view.defender_stats.pd == 10
        assert view.defender_stats.ed == 127

    def test_toggle_on_keeps_other_edits(self, miscrits):
        inputs = _inputs(defender_name="Dorux")
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "defender", view, "HP", 999)
        view = evaluate(miscrits, inputs)

        inputs = set_avg_def(inputs, view, True)
        view = evaluate(miscrits, inputs)

        assert inputs.avg_def
        assert view.defender_stats.hp == 999
        assert view.defender_stats.pd == 139

    def test_reselected_defender_is_remapped(self, miscrits):
        inputs = _inputs(defender_name="Sparkion", avg_def=True)
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "defender", view, "HP", 1)

        view = evaluate(miscrits, select_miscrit(inputs, "defender", "Dorux"))

        assert (view.defender_stats.pd, view.defender_stats.ed) == (139, 127)
        assert view.defender_stats.hp == 170

    def test_swap_remaps_new_defender(self, miscrits):
        inputs = _inputs(attacker_name="Dorux", defender_name="Flue", avg_def=True)
        view = evaluate(miscrits, inputs)

        swapped = evaluate(miscrits, swap_roles(inputs, view))

        assert swapped.defender.name == "Dorux"
        assert (swapped.defender_stats.pd, swapped.defender_stats.ed) == (139, 127)

    def test_attacker_untouched(self, miscrits):
        view = evaluate(miscrits, _inputs(attacker_name="Dorux", avg_def=True))
        assert view.attacker_stats.pd == 107


# ---------------------------------------------------------------------------
# Input transitions
# ---------------------------------------------------------------------------

class TestTransitions:
    def test_select_reseeds_snapshot(self, miscrits):
        inputs = _inputs(attacker_name="Flue")
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "attacker", view, "PA", 1)

        inputs = select_miscrit(inputs, "attacker", "Aria")
        view = evaluate(miscrits, inputs)

        assert view.attacker.name == "Aria"
        assert view.attacker_stats == miscrits[3].stats

    def test_refresh(self, miscrits):
        inputs = _inputs(defender_name="Dorux", avg_def=True)
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "defender", view, "HP", 1)

        view = evaluate(miscrits, refresh(inputs, "defender"))

        assert view.defender_stats == miscrits[2].stats

    def test_refresh_attacker(self, miscrits):
        inputs = _inputs()
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "attacker", view, "PA", 1)
        assert evaluate(miscrits, refresh(inputs, "attacker")).attacker_stats.pa == 72

    def test_swap(self, miscrits):
        inputs = _inputs(attacker_name="Flue", defender_name="Dorux")
        view = evaluate(miscrits, inputs)
        inputs = set_stat(inputs, "attacker", view, "PA", 5)
        view = evaluate(miscrits, inputs)

        swapped = evaluate(miscrits, swap_roles(inputs, view))

        assert swapped.attacker.name == "Dorux"
        assert swapped.defender.name == "Flue"
        assert swapped.defender_stats.pa == 5
        assert swapped.attacker_stats == miscrits[2].stats
