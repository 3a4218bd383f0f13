"""
CLI tool for generating workout plans offline.

Usage examples:
    # Build a 3-day strength plan from a JSON catalog export
    python -m scripts.tools.plan_cli plan --catalog catalog.json --days 3 --goal strength

    # Pin the shuffle for a reproducible plan
    python -m scripts.tools.plan_cli plan --catalog catalog.json --days 5 --seed 42

    # Build a plan from the configured database
    python -m scripts.tools.plan_cli plan --from-db --days 4 --targets chest,lats

    # Show the focus split for a number of days
    python -m scripts.tools.plan_cli focuses --days 6
"""
import argparse
import asyncio
import json
import random
import sys
from typing import Any

from app.ml.planning import (
    ExerciseRecord,
    PlanningOptions,
    PlanningProfile,
    WorkoutPlanEngine,
    planned_focuses,
)


def load_catalog_file(path: str) -> list[ExerciseRecord]:
    """Load a catalog from a JSON list (or ``{"exercises": [...]}``) of exercise rows."""
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("exercises", [])
    return [ExerciseRecord.from_mapping(row) for row in data]


async def load_catalog_db(limit: int) -> list[ExerciseRecord]:
    """Load the catalog through the application repository."""
    from app.db.database import async_session_maker, close_all_engines
    from app.repositories.exercise_repository import ExerciseRepository

    try:
        async with async_session_maker() as db:
            return await ExerciseRepository(db).list_catalog(limit=limit)
    finally:
        await close_all_engines()


def build_options(args) -> PlanningOptions:
    targets = [t.strip() for t in (args.targets or "").split(",") if t.strip()]
    return PlanningOptions(
        max_exercises=args.max_exercises,
        exercises_per_day=args.per_day,
        preferred_targets=tuple(targets),
    ).normalized()


def plan_command(args) -> int:
    """Handle plan command."""
    if args.from_db:
        catalog = asyncio.run(load_catalog_db(args.limit))
    elif args.catalog:
        catalog = load_catalog_file(args.catalog)
    else:
        print("❌ Either --catalog or --from-db is required.", file=sys.stderr)
        return 2

    shuffle = random.Random(args.seed).shuffle if args.seed is not None else None
    engine = WorkoutPlanEngine(shuffle=shuffle)
    profile = PlanningProfile(goal=args.goal, days_per_week=args.days)
    result: dict[str, Any] = engine.generate(profile, catalog, build_options(args))

    print(json.dumps(result, indent=2 if args.pretty else None))
    return 1 if "error" in result else 0


def focuses_command(args) -> int:
    """Handle focuses command."""
    print(f"\n=== {args.days}-Day Split ===")
    for index, focus in enumerate(planned_focuses(args.days), start=1):
        print(f"  Day {index}: {focus}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Workout Plan CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plan from a JSON catalog
  python -m scripts.tools.plan_cli plan --catalog catalog.json --days 3 --goal strength

  # Reproducible plan
  python -m scripts.tools.plan_cli plan --catalog catalog.json --days 5 --seed 42 --pretty

  # Show the split table
  python -m scripts.tools.plan_cli focuses --days 7
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # plan command
    plan_parser = subparsers.add_parser(
        "plan",
        help="Generate a weekly workout plan"
    )
    source = plan_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog", "-c",
        help="JSON file containing catalog exercises"
    )
    source.add_argument(
        "--from-db",
        action="store_true",
        help="Load the catalog from the configured database"
    )
    plan_parser.add_argument(
        "--days", "-d",
        type=int,
        default=3,
        help="Training days per week (default: 3)"
    )
    plan_parser.add_argument(
        "--goal", "-g",
        default=None,
        help="Training goal, e.g. strength, hypertrophy, endurance"
    )
    plan_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for a reproducible shuffle"
    )
    plan_parser.add_argument(
        "--per-day",
        type=int,
        default=6,
        help="Exercises per day, clamped to 4-8 (default: 6)"
    )
    plan_parser.add_argument(
        "--max-exercises",
        type=int,
        default=30,
        help="Candidate pool size, clamped to 5-100 (default: 30)"
    )
    plan_parser.add_argument(
        "--targets", "-t",
        default=None,
        help="Comma-separated preferred targets"
    )
    plan_parser.add_argument(
        "--limit",
        type=int,
        default=1000,
        help="Max catalog rows loaded with --from-db (default: 1000)"
    )
    plan_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the JSON output"
    )
    plan_parser.set_defaults(func=plan_command)

    # focuses command
    focuses_parser = subparsers.add_parser(
        "focuses",
        help="Show the focus split for a number of days"
    )
    focuses_parser.add_argument(
        "--days", "-d",
        type=int,
        required=True,
        help="Training days per week"
    )
    focuses_parser.set_defaults(func=focuses_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
