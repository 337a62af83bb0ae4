"""One-pass calculator pipeline.

Given the loaded miscrits and the user's current choices
(:class:`CalculatorInputs`), :func:`evaluate` resolves the selected
attacker, defender and attack, builds both working stat snapshots and runs
the damage engine, returning everything a presentation layer needs in a
:class:`CalculatorView`.  Inputs are never mutated; the helpers at the
bottom return updated copies for selection, swap and refresh.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from miscrits_calc.config import DEFAULT_STATS
from miscrits_calc.engine.aggregate import DamageResult, compute_result
from miscrits_calc.engine.avg_tier import apply_avg_tier
from miscrits_calc.engine.damage import DamageRange
from miscrits_calc.ir.attacks import AttackDefinition
from miscrits_calc.ir.miscrits import AttackTab, MiscritDefinition
from miscrits_calc.ir.stats import StatBlock

Role = Literal["attacker", "defender"]


class CalculatorInputs(BaseModel):
    """Everything the user can choose in the calculator."""

    attacker_name: str = ""
    defender_name: str = ""

    attacker_stats: StatBlock | None = None
    """Working attacker snapshot.  ``None`` means the entity's base stats."""

    defender_stats: StatBlock | None = None
    """Working defender snapshot.  ``None`` means the entity's base stats."""

    attack_tab: AttackTab = "base"
    selected_attack: str | None = None
    """Name of the selected attack; falls back to the strongest one."""

    avg_def: bool = False
    """Remap the defender's PD/ED to average-tier values."""

    custom_only_attacker: bool = False
    custom_only_defender: bool = False


class CalculatorView(BaseModel):
    """Derived state for one evaluation of the calculator."""

    attacker: MiscritDefinition | None = None
    defender: MiscritDefinition | None = None
    attacker_stats: StatBlock
    defender_stats: StatBlock
    attacks: list[AttackDefinition] = []
    selected_attack: AttackDefinition | None = None
    result: DamageResult | None = None

    main_with_true_damage: DamageRange | None = None
    combined_total: DamageRange | None = None
    combined_with_true_damage: DamageRange | None = None
    hits_to_ko: int | None = None


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def _display_list(miscrits: list[MiscritDefinition], custom_only: bool) -> list[MiscritDefinition]:
    if custom_only:
        return [m for m in miscrits if m.is_custom]
    return list(miscrits)


def _find(miscrits: list[MiscritDefinition], name: str) -> MiscritDefinition | None:
    for miscrit in miscrits:
        if miscrit.name == name:
            return miscrit
    return None


def select_attacker(
    miscrits: list[MiscritDefinition], name: str, custom_only: bool = False
) -> MiscritDefinition | None:
    """The named miscrit if listed, else the first listed one."""
    listed = _display_list(miscrits, custom_only)
    if not listed:
        return None
    return _find(listed, name) or listed[0]


def select_defender(
    miscrits: list[MiscritDefinition], name: str, custom_only: bool = False
) -> MiscritDefinition | None:
    """The named miscrit if listed, else the second listed one, else the first."""
    listed = _display_list(miscrits, custom_only)
    if not listed:
        return None
    fallback = listed[1] if len(listed) > 1 else listed[0]
    return _find(listed, name) or fallback


def base_snapshot(miscrit: MiscritDefinition | None) -> StatBlock:
    """A fresh working copy of a miscrit's base stats."""
    if miscrit is None:
        return StatBlock(**DEFAULT_STATS)
    return miscrit.stats.model_copy()


def sorted_attacks(miscrit: MiscritDefinition | None, tab: AttackTab = "base") -> list[AttackDefinition]:
    """Attacks for *tab*, strongest (``ap * hits``) first."""
    if miscrit is None:
        return []
    return sorted(miscrit.attacks_for(tab), key=lambda a: a.sort_key, reverse=True)


def sync_selected_attack(
    attacks: list[AttackDefinition], previous: str | None
) -> AttackDefinition | None:
    """Keep the previously selected attack if still offered, else the first."""
    if previous is not None:
        for attack in attacks:
            if attack.name == previous:
                return attack
    return attacks[0] if attacks else None


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def evaluate(miscrits: list[MiscritDefinition], inputs: CalculatorInputs) -> CalculatorView:
    """Compute the full calculator state for *inputs* in one pass."""
    attacker = select_attacker(miscrits, inputs.attacker_name, inputs.custom_only_attacker)
    defender = select_defender(miscrits, inputs.defender_name, inputs.custom_only_defender)

    attacker_stats = (
        inputs.attacker_stats.model_copy()
        if inputs.attacker_stats is not None
        else base_snapshot(attacker)
    )
    if inputs.defender_stats is not None:
        defender_stats = inputs.defender_stats.model_copy()
    else:
        # A freshly seeded defender picks up the average-tier remap; an
        # edited snapshot already carries it.
        defender_stats = base_snapshot(defender)
        if inputs.avg_def and defender is not None:
            defender_stats = apply_avg_tier(defender_stats, defender.stats)

    attacks = sorted_attacks(attacker, inputs.attack_tab)
    selected = sync_selected_attack(attacks, inputs.selected_attack)

    view = CalculatorView(
        attacker=attacker,
        defender=defender,
        attacker_stats=attacker_stats,
        defender_stats=defender_stats,
        attacks=attacks,
        selected_attack=selected,
    )
    if selected is None or attacker is None or defender is None:
        return view

    result = compute_result(selected, attacker_stats, defender_stats, defender.elements)
    view.result = result
    view.main_with_true_damage = result.main_with_true_damage()
    view.combined_total = result.combined_total()
    view.combined_with_true_damage = result.combined_with_true_damage()
    view.hits_to_ko = result.hits_to_ko(defender_stats.hp)
    return view


# ---------------------------------------------------------------------------
# Input transitions
# ---------------------------------------------------------------------------

def select_miscrit(inputs: CalculatorInputs, role: Role, name: str) -> CalculatorInputs:
    """Pick a new miscrit for *role*; its snapshot is reseeded from base stats."""
    if role == "attacker":
        return inputs.model_copy(update={"attacker_name": name, "attacker_stats": None})
    return inputs.model_copy(update={"defender_name": name, "defender_stats": None})


def set_stat(inputs: CalculatorInputs, role: Role, view: CalculatorView, key: str, value: object) -> CalculatorInputs:
    """Edit one stat of a role's working snapshot."""
    if role == "attacker":
        snapshot = view.attacker_stats.with_overrides(**{key: value})
        return inputs.model_copy(update={"attacker_stats": snapshot})
    snapshot = view.defender_stats.with_overrides(**{key: value})
    return inputs.model_copy(update={"defender_stats": snapshot})


def refresh(inputs: CalculatorInputs, role: Role) -> CalculatorInputs:
    """Restore a role's snapshot to its miscrit's base stats."""
    if role == "attacker":
        return inputs.model_copy(update={"attacker_stats": None})
    return inputs.model_copy(update={"defender_stats": None, "avg_def": False})


def set_avg_def(inputs: CalculatorInputs, view: CalculatorView, enabled: bool) -> CalculatorInputs:
    """Toggle the average-tier defence remap.

    Turning it on remaps the current defender snapshot, keeping other edits.
    Turning it off reseeds the snapshot from the defender's base stats.
    """
    if not enabled:
        return inputs.model_copy(update={"avg_def": False, "defender_stats": None})
    snapshot = view.defender_stats.model_copy()
    if view.defender is not None:
        snapshot = apply_avg_tier(snapshot, view.defender.stats)
    return inputs.model_copy(update={"avg_def": True, "defender_stats": snapshot})


def swap_roles(inputs: CalculatorInputs, view: CalculatorView) -> CalculatorInputs:
    """Exchange attacker and defender, carrying their current snapshots."""
    new_defender = view.attacker
    defender_stats = view.attacker_stats.model_copy()
    if inputs.avg_def and new_defender is not None:
        defender_stats = apply_avg_tier(defender_stats, new_defender.stats)
    return inputs.model_copy(
        update={
            "attacker_name": view.defender.name if view.defender else inputs.defender_name,
            "defender_name": new_defender.name if new_defender else inputs.attacker_name,
            "attacker_stats": view.defender_stats.model_copy(),
            "defender_stats": defender_stats,
        }
    )
