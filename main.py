#!/usr/bin/env python3

import argparse

from orbcrunch.core.data.game_enums import ELEMENTAL_TYPES
from orbcrunch.core.errors import CrunchError
from orbcrunch.core.events import AttackBonusChanged, DefenseChanged, HpChanged, LogSaveRequested
from orbcrunch.game.crunch_app import CrunchApp
from orbcrunch.game.managers.log_manager import LogLevel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate the damage and HP of a six-unit team",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --team assets/teams/example.yaml
  python main.py --team assets/teams/example.yaml --details DEX
  python main.py --team assets/teams/example.yaml --defense 150 --bonus 1.5
        """
    )
    parser.add_argument("--team", default="assets/teams/example.yaml", help="Team YAML file")
    parser.add_argument("--details", metavar="TYPE", help="Print the breakdown against an enemy type")
    parser.add_argument("--defense", type=int, help="Enemy defense threshold")
    parser.add_argument("--bonus", type=float, help="Global attack bonus")
    parser.add_argument("--hp", type=float, nargs=3, metavar=("CUR", "MAX", "PERC"),
                        help="Current HP, max HP and HP percentage")
    parser.add_argument("--config", help="Config file (default: assets/config/crunch.yaml)")
    parser.add_argument("--save-log", action="store_true", help="Write the crunch log to logs/")
    return parser


def main():
    args = build_parser().parse_args()

    app = CrunchApp.from_config_file(args.config)

    try:
        result = app.load_team(args.team)

        overrides = []
        if args.bonus is not None:
            overrides.append(AttackBonusChanged(value=args.bonus))
        if args.defense is not None:
            overrides.append(DefenseChanged(value=args.defense))
        if args.hp is not None:
            overrides.append(HpChanged(current=args.hp[0], maximum=args.hp[1], percent=args.hp[2]))
        if overrides:
            result = app.dispatch(*overrides)

        for error in app.event_manager.get_subscriber_errors():
            print(f"Error: {error}")

        if result is not None:
            print("Damage per enemy type:")
            for unit_type in ELEMENTAL_TYPES:
                print(f"  {unit_type.value:<4} {result.damage[unit_type]:>10}")
            print(f"  {'HP':<4} {result.hp:>10}")
            best = result.best_type()
            if best is not None:
                print(f"Best against: {best.value}")

        if args.details:
            details = app.details(args.details)
            print(f"\nDetails against {args.details.upper()}:")
            print("  Hits:        " + ", ".join(hit.display_name for hit in details.modifiers))
            print("  Multipliers: " + ", ".join(f"{m:g}" for m in details.multipliers))
            for entry in details.order:
                print(f"  slot {entry.original_slot}: {entry.unit.name:<24} {entry.damage:>10}")

        for entry in app.log_manager.messages:
            if entry.level in (LogLevel.WARNING, LogLevel.ERROR):
                print(entry.format())
    except (CrunchError, FileNotFoundError, ValueError) as e:
        print(f"\n\nError: {e}")
        raise
    finally:
        if args.save_log:
            app.dispatch(LogSaveRequested(directory="logs"))


if __name__ == "__main__":
    main()
