"""Plain-text damage report for terminal output."""

from __future__ import annotations

from miscrits_calc.engine.damage import DamageRange
from miscrits_calc.pipeline import CalculatorView


def _fmt(r: DamageRange) -> str:
    return f"Min: {r.min} · Avg: {r.avg} · Max: {r.max}"


def generate_text_report(view: CalculatorView) -> str:
    """Generate a human-readable summary of one calculator evaluation."""
    lines: list[str] = []
    attacker, defender = view.attacker, view.defender

    lines.append("=" * 60)
    lines.append(
        f"{attacker.name if attacker else 'none'} -> {defender.name if defender else 'none'}"
    )
    lines.append("=" * 60)

    for title, miscrit, stats in (
        ("Attacker", attacker, view.attacker_stats),
        ("Defender", defender, view.defender_stats),
    ):
        elements = "/".join(miscrit.elements) if miscrit and miscrit.elements else "none"
        stat_text = "  ".join(f"{k}={v}" for k, v in stats.to_display().items())
        lines.append(f"  {title:9s} [{elements}]  {stat_text}")

    result, attack = view.result, view.selected_attack
    if result is None or attack is None:
        lines.append("")
        lines.append("No attack selected.")
        return "\n".join(lines)

    main = result.main
    lines.append("")
    hits_text = f" × {main.hits}" if main.hits > 1 else ""
    lines.append(f"## {attack.name} [{main.element}] · AP: {attack.ap}{hits_text}")
    lines.append(f"  Elemental multiplier: {main.elem_mul:.2f}")
    lines.append(f"  Atk/Def ratio:        {main.atk_def_ratio}")
    if main.hits > 1:
        lines.append(f"  Per hit:  {_fmt(main.per)}")
    lines.append(f"  Total:    {_fmt(main.total)}")
    if view.main_with_true_damage is not None:
        lines.append(f"  with true damage: {_fmt(view.main_with_true_damage)}")
    if view.hits_to_ko is not None:
        lines.append(f"  Hits to KO (avg + true dmg): {view.hits_to_ko}")

    if result.extra is not None:
        extra = result.extra
        lines.append("")
        lines.append(f"## {extra.name} [{extra.element}] · AP: {extra.ap}")
        lines.append(f"  Elemental multiplier: {extra.elem_mul:.2f}")
        lines.append(f"  Atk/Def ratio:        {extra.atk_def_ratio}")
        lines.append(f"  Per hit:  {_fmt(extra.per)}")
        if view.combined_total is not None:
            lines.append("")
            lines.append("## Total damage (base + extra)")
            lines.append(f"  {_fmt(view.combined_total)}")
        if view.combined_with_true_damage is not None:
            lines.append(f"  with true damage: {_fmt(view.combined_with_true_damage)}")

    return "\n".join(lines)
