"""Compute the gamification state for an exported activity list.

Usage: python3 scripts/run_pipeline.py activities.json [--athlete athlete.json] [--output out.json]
"""
import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.error_reporting import init_error_reporting
from packages.logging_utils import setup_logging
from services.gamification.formatting import format_duration, format_km, format_money
from services.gamification.pipeline import (
    ActivityParseError,
    load_activities,
    process_user_data,
    to_dict,
    wallet_breakdown,
)


def read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SystemExit(f"File not found: {path}")
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Derive wallet, medals and rank from activities.")
    parser.add_argument("activities", type=Path, help="JSON list of activities (or {'activities': [...]})")
    parser.add_argument("--athlete", type=Path, help="JSON athlete object, passed through")
    parser.add_argument("--output", type=Path, help="write the full result as JSON")
    return parser.parse_args(argv)


def print_summary(data) -> None:
    breakdown = wallet_breakdown(data)
    print(f"Activities: {data.totals.activities}")
    print(f"Distance:   {format_km(data.totals.distance)}")
    print(f"Time:       {format_duration(data.totals.hours * 3600)}")
    print(f"Rank:       {data.rank.emoji} {data.rank.name} (level {data.level}, {data.next_rank_progress:.0f}% to next)")
    print(f"League:     {data.league_class.emoji} {data.league_class.name}")
    print(
        f"Wallet:     {format_money(data.wallet_value)} "
        f"(coins {format_money(breakdown['coins'])}, medals {format_money(breakdown['medals'])})"
    )
    for medal in data.medals:
        print(f"  {medal.emoji} {medal.name} x{medal.count}")


def main(argv=None):
    args = parse_args(argv)
    setup_logging()
    init_error_reporting("pipeline")

    raw = read_json(args.activities)
    records = raw.get("activities", []) if isinstance(raw, dict) else raw
    if not isinstance(records, list):
        raise SystemExit("Activities JSON must be a list or contain an 'activities' list")
    athlete = read_json(args.athlete) if args.athlete else {}

    try:
        activities = load_activities(records)
    except ActivityParseError as exc:
        raise SystemExit(str(exc))

    data = process_user_data(athlete, activities)
    print_summary(data)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(to_dict(data), indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"JSON output saved to: {args.output}")


if __name__ == "__main__":
    main()
