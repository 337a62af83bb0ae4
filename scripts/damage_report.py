"""Print a damage report for one attacker/defender/attack combination.

Usage:
    uv run python scripts/damage_report.py --attacker Flue --defender Sparkion \
        [--attack Ember] [--tab enhanced] [--avg-def] [--db data/miscritsdb.json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from miscrits_calc.config import DEFAULT_CUSTOM_STORE_PATH, DEFAULT_DB_PATH, STAT_KEYS
from miscrits_calc.pipeline import CalculatorInputs, evaluate, select_miscrit, set_stat
from miscrits_calc.registry import CustomMiscritError, MiscritRegistry
from miscrits_calc.report import generate_text_report
from miscrits_calc.storage import JsonFileCustomStore


def _parse_overrides(values: list[str]) -> list[tuple[str, str]]:
    overrides = []
    for item in values:
        key, _, value = item.partition("=")
        key = key.strip().upper()
        if key not in STAT_KEYS:
            raise SystemExit(f"Unknown stat {key!r}; expected one of {', '.join(STAT_KEYS)}")
        overrides.append((key, value))
    return overrides


def main() -> None:
    parser = argparse.ArgumentParser(description="Miscrits damage calculator")
    parser.add_argument("--db", type=str, default=str(DEFAULT_DB_PATH), help="Miscrit database JSON")
    parser.add_argument("--custom-store", type=str, default=str(DEFAULT_CUSTOM_STORE_PATH),
                        help="JSON file holding custom miscrits")
    parser.add_argument("--attacker", type=str, default="", help="Attacker name")
    parser.add_argument("--defender", type=str, default="", help="Defender name")
    parser.add_argument("--attack", type=str, default=None, help="Attack name (default: strongest)")
    parser.add_argument("--tab", choices=["base", "enhanced"], default="base", help="Attack list")
    parser.add_argument("--avg-def", action="store_true", help="Remap defender PD/ED to average tier")
    parser.add_argument("--attacker-stat", action="append", default=[], metavar="KEY=VALUE",
                        help="Override an attacker stat (repeatable)")
    parser.add_argument("--defender-stat", action="append", default=[], metavar="KEY=VALUE",
                        help="Override a defender stat (repeatable)")
    parser.add_argument("--create-custom", nargs=2, metavar=("BASE", "NAME"),
                        help="Save a custom miscrit from BASE using --attacker-stat overrides")
    parser.add_argument("--delete-custom", type=str, metavar="NAME", help="Delete a custom miscrit")
    parser.add_argument("--json", action="store_true", help="Print the raw result object as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = MiscritRegistry(JsonFileCustomStore(Path(args.custom_store)))
    if not registry.load_file(args.db):
        print(f"Error: {registry.load_error}", file=sys.stderr)
        print("No miscrits available.", file=sys.stderr)
        sys.exit(1)

    if args.delete_custom:
        removed = registry.delete_custom(args.delete_custom)
        print(f"Deleted {args.delete_custom}" if removed else f"No custom miscrit named {args.delete_custom}")
        return

    if args.create_custom:
        base_name, name = args.create_custom
        base = registry.get_base(base_name)
        stats = base.stats.to_display() if base else {}
        stats.update(dict(_parse_overrides(args.attacker_stat)))
        try:
            custom = registry.build_custom(base_name, stats, name=name)
        except CustomMiscritError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        registry.save_custom(custom)
        print(f"Saved custom miscrit {custom.name} (base {custom.base_name})")
        return

    inputs = CalculatorInputs(
        attack_tab=args.tab,
        selected_attack=args.attack,
        avg_def=args.avg_def,
    )
    inputs = select_miscrit(inputs, "attacker", args.attacker)
    inputs = select_miscrit(inputs, "defender", args.defender)

    view = evaluate(registry.all, inputs)
    for key, value in _parse_overrides(args.attacker_stat):
        inputs = set_stat(inputs, "attacker", view, key, value)
        view = evaluate(registry.all, inputs)
    for key, value in _parse_overrides(args.defender_stat):
        inputs = set_stat(inputs, "defender", view, key, value)
        view = evaluate(registry.all, inputs)

    if args.json:
        payload = view.result.model_dump(by_alias=True) if view.result else None
        print(json.dumps(payload, indent=2))
        return

    print(generate_text_report(view))


if __name__ == "__main__":
    main()
