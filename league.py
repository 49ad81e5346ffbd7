#!/usr/bin/env python3
"""
Sober League CLI

Generates round-robin schedules and scores weekly fixtures from substance logs.
Data lives in JSON files under data/:
    data/participants.json   roster (player name -> user id)
    data/fixtures.json       generated fixtures and their results
    data/substance_logs.json logged substances
    data/league_config.json  clean-sheet bonus and substance catalog

Usage:
    python league.py generate --start 2024-01-01 --season 1
    python league.py check --start 2024-01-01 --players A B C D E --allow-byes
    python league.py check --start 2024-01-01 --schedule-file my_schedule.txt
    python league.py process --season 1 --week 3
    python league.py standings --season 1
    python league.py --log-file process --season 1   (log written to data/logs/)
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from soberleague import (
    FixtureStore,
    LeagueError,
    SubstanceLogStore,
    WeekProcessor,
    analyze_schedule,
    compute_standings,
    find_schedule_errors,
    format_schedule,
    generate_match_schedule,
    load_participants,
    parse_schedule_file,
    schedule_from_pairings,
    validate_match_schedule,
    validate_roster,
    week_start,
)
from soberleague.config import get_config, load_config
from soberleague.logging_config import setup_logging


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date (expected YYYY-MM-DD): {value}")


def cmd_generate(args, data_dir: Path) -> int:
    roster = load_participants(data_dir / "participants.json")
    players = list(roster)

    problems = validate_roster(players, allow_odd=args.allow_byes)
    if problems:
        for problem in problems:
            print(f"❌ {problem}")
        return 1

    start = week_start(args.start) if args.align else args.start
    schedule = generate_match_schedule(start, players, args.season, allow_byes=args.allow_byes)

    if not args.allow_byes and not validate_match_schedule(schedule, players):
        print("❌ Failed to generate a valid match schedule")
        return 1

    fixtures_path = data_dir / "fixtures.json"
    store = FixtureStore.from_json(fixtures_path) if fixtures_path.exists() else FixtureStore()
    created = store.add_schedule(schedule)
    store.save(fixtures_path)

    print(f"Generated {len(schedule)} weeks ({created} matches) for season {args.season}")
    if args.output:
        Path(args.output).write_text(format_schedule(schedule), encoding="utf-8")
        print(f"Schedule written to {args.output}")
    return 0


def cmd_check(args, data_dir: Path) -> int:
    if args.players:
        players = args.players
    else:
        players = list(load_participants(data_dir / "participants.json"))

    if args.schedule_file:
        pairings = parse_schedule_file(args.schedule_file)
        schedule = schedule_from_pairings(pairings, args.start)
    else:
        schedule = generate_match_schedule(args.start, players, allow_byes=args.allow_byes)

    errors = find_schedule_errors(schedule, players)
    is_valid = not errors
    analysis = analyze_schedule(schedule, players)

    print(format_schedule(schedule), end="")
    print("=" * 60)
    for error in errors:
        print(f"❌ {error}")
    print(f"Valid: {is_valid}")
    print(f"Weeks: {analysis['total_weeks']}, matches per week: {analysis['matches_per_week']}")
    if analysis["missing_matchups"]:
        print(f"Missing matchups: {', '.join(analysis['missing_matchups'])}")
    return 0 if is_valid or (args.allow_byes and not args.schedule_file) else 1


def cmd_process(args, data_dir: Path) -> int:
    config = load_config(args.config) if args.config else get_config()
    fixtures_path = data_dir / "fixtures.json"
    logs_path = data_dir / "substance_logs.json"

    if not fixtures_path.exists():
        print(f"❌ Fixtures file not found: {fixtures_path}")
        return 1

    store = FixtureStore.from_json(fixtures_path)
    logs = (
        SubstanceLogStore.from_json(logs_path, config.substances)
        if logs_path.exists()
        else SubstanceLogStore(substance_points=config.substances)
    )
    roster = load_participants(data_dir / "participants.json")

    processor = WeekProcessor.from_config(store, logs, roster, config)
    results = processor.process_round(args.season, args.week, args.today)

    if not results:
        print("No unprocessed matches found")
        return 0

    store.save(fixtures_path)

    print(f"Processed {len(results)} match(es)")
    for r in results:
        clean = [p for p, side in ((r.player1, "player1"), (r.player2, "player2")) if r.clean_sheets[side]]
        clean_note = f"  clean sheet: {', '.join(clean)}" if clean else ""
        print(
            f"  Week {r.week}: {r.player1} {r.player1_points:g} - "
            f"{r.player2_points:g} {r.player2} -> {r.winner}{clean_note}"
        )
    return 0


def cmd_standings(args, data_dir: Path) -> int:
    fixtures_path = data_dir / "fixtures.json"
    if not fixtures_path.exists():
        print(f"❌ Fixtures file not found: {fixtures_path}")
        return 1

    store = FixtureStore.from_json(fixtures_path)
    roster = load_participants(data_dir / "participants.json")
    table = compute_standings(store.find(season=args.season), roster, roster)

    print(f"\n{'=' * 60}")
    print(f"SEASON {args.season} STANDINGS")
    print("=" * 60)
    for row in table:
        print(
            f"  {row.rank}. {row.player_name}: {row.points} pts "
            f"({row.wins}W {row.draws}D {row.losses}L, {row.substance_points:g} substance pts)"
        )
    return 0


def main():
    parser = argparse.ArgumentParser(description="Sober League scheduler and scorer")
    parser.add_argument(
        "--data-dir", "-d",
        default="data",
        help="Path to data directory",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a log file under <data-dir>/logs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate and store a season schedule")
    generate.add_argument("--start", type=parse_date, required=True, help="First day of week 1")
    generate.add_argument("--season", "-s", type=int, default=1, help="Season number")
    generate.add_argument("--allow-byes", action="store_true", help="Allow an odd roster")
    generate.add_argument("--align", action="store_true", help="Move the start back to its Monday")
    generate.add_argument("--output", "-o", default=None, help="Also write the schedule as text")

    check = subparsers.add_parser("check", help="Generate and validate a schedule without saving")
    check.add_argument("--start", type=parse_date, required=True, help="First day of week 1")
    check.add_argument("--players", nargs="+", default=None, help="Player names (default: roster)")
    check.add_argument("--allow-byes", action="store_true", help="Allow an odd roster")
    check.add_argument(
        "--schedule-file", "-f",
        default=None,
        help="Validate a hand-written schedule (\"Week N: A versus B, ...\" lines) instead",
    )

    process = subparsers.add_parser("process", help="Score unprocessed matches")
    process.add_argument("--season", "-s", type=int, required=True, help="Season number")
    process.add_argument("--week", "-w", type=int, default=None, help="Week (default: all elapsed weeks)")
    process.add_argument("--today", type=parse_date, default=None, help="Reference date for elapsed weeks")
    process.add_argument("--config", "-c", default=None, help="League config file")

    standings = subparsers.add_parser("standings", help="Show the league table")
    standings.add_argument("--season", "-s", type=int, required=True, help="Season number")

    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    setup_logging(
        log_dir=data_dir / "logs",
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=args.log_file,
    )

    commands = {
        "generate": cmd_generate,
        "check": cmd_check,
        "process": cmd_process,
        "standings": cmd_standings,
    }

    try:
        exit_code = commands[args.command](args, data_dir)
    except (LeagueError, FileNotFoundError, ValueError) as e:
        print(f"❌ {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
