"""Command-line interface for the stage prep engine."""

import argparse
import logging
import os
import sys
from datetime import date, datetime

from stage_prep.catalog import format_catalog
from stage_prep.config import DEFAULT_ASSESSMENT
from stage_prep.db import DB_PATH, init_db
from stage_prep.engine import analyze, recalculate
from stage_prep.intake import InvalidInput
from stage_prep.macro_calculator import format_targets
from stage_prep.meal_builder import format_meal_plan
from stage_prep.models import (
    BudgetLevel,
    DietType,
    ExperienceLevel,
    MealSlot,
    Nutrition,
    Phase,
    StagePrepPlan,
)
from stage_prep.snapshot_store import delete_snapshot, load_snapshot, save_snapshot
from stage_prep.tracker import format_day, log_scan, state_for_day

# Assessment field -> (flag, type, help)
ASSESSMENT_OPTIONS = [
    ("age", "--age", int, "Age in years"),
    ("height_cm", "--height", float, "Height (cm)"),
    ("current_weight_kg", "--weight", float, "Current weight (kg)"),
    ("target_stage_weight_kg", "--target-weight", float, "Target stage weight (kg)"),
    ("body_fat_percent", "--body-fat", float, "Body fat %"),
    ("competition_date", "--competition-date", str, "Competition date (YYYY-MM-DD)"),
    ("training_sessions_per_week", "--training", int, "Training sessions per week"),
    ("cardio_sessions_per_week", "--cardio", int, "Cardio sessions per week"),
    ("fullness_priority", "--fullness", float, "Muscle fullness priority (0-100)"),
    ("fat_loss_priority", "--fat-loss", float, "Fat loss priority (0-100)"),
    ("dryness_priority", "--dryness", float, "Stage dryness priority (0-100)"),
    ("strength_priority", "--strength", float, "Strength retention priority (0-100)"),
]

ASSESSMENT_CHOICES = [
    ("experience_level", "--experience", ExperienceLevel, "Experience level"),
    ("phase", "--phase", Phase, "Current phase"),
    ("diet_type", "--diet", DietType, "Diet type"),
    ("budget_level", "--budget", BudgetLevel, "Budget level"),
]


def _print_plan(plan: StagePrepPlan) -> None:
    print(format_targets(plan.targets))
    print()
    print(format_meal_plan(plan))


def _load_plan_or_exit(db_path: str) -> StagePrepPlan:
    plan = load_snapshot(db_path=db_path)
    if plan is None:
        print("No stage prep plan found. Run an assessment first:")
        print("  python -m stage_prep assess")
        sys.exit(1)
    return plan


def _parse_date(value: str, flag: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        print(f"Invalid {flag}: {value} (expected YYYY-MM-DD)")
        sys.exit(1)


# --- Command handlers ---

def cmd_assess(args):
    form = {
        field: getattr(args, field)
        for field, _, _, _ in ASSESSMENT_OPTIONS + ASSESSMENT_CHOICES
    }
    try:
        plan = analyze(form)
    except InvalidInput as exc:
        print(f"Invalid input: {exc}")
        sys.exit(1)

    save_snapshot(plan, db_path=args.db)
    _print_plan(plan)
    print(f"\nPlan saved. {plan.targets.daily_calories} kcal plan synced to the meal planner.")


def cmd_show(args):
    plan = _load_plan_or_exit(args.db)
    a = plan.assessment
    print(f"Phase:    {a.phase.value}")
    print(f"Weight:   {a.current_weight_kg:g} kg (stage target {a.target_stage_weight_kg:g} kg)")
    print(f"Diet:     {a.diet_type.value}, {a.budget_level.value} budget")
    print(f"Contest:  {a.competition_date.isoformat() if a.competition_date else 'Not set'}")
    print()
    _print_plan(plan)


def cmd_recalculate(args):
    plan = _load_plan_or_exit(args.db)
    try:
        plan = recalculate(plan, args.weight)
    except InvalidInput as exc:
        print(f"Invalid input: {exc}")
        sys.exit(1)

    save_snapshot(plan, db_path=args.db)
    _print_plan(plan)
    print(f"\nPlan recalculated for {args.weight:g} kg and saved.")


def cmd_reset(args):
    if delete_snapshot(db_path=args.db):
        print("Stage prep plan deleted.")
    else:
        print("No stage prep plan to delete.")


def cmd_foods(args):
    print(format_catalog())


def cmd_scan_add(args):
    added_at = datetime.now()
    if args.date:
        try:
            added_at = datetime.fromisoformat(args.date)
        except ValueError:
            print(f"Invalid --date: {args.date}")
            sys.exit(1)

    nutrition = Nutrition(
        calories=args.calories,
        protein_g=args.protein,
        carbs_g=args.carbs,
        fat_g=args.fat,
        fiber_g=args.fiber,
        estimated_weight_g=args.grams,
    )
    scan_id = log_scan(MealSlot(args.meal), args.food, nutrition, added_at, db_path=args.db)
    print(f"Logged: {args.food} to {args.meal} ({args.calories:g} kcal) [#{scan_id}]")


def cmd_track(args):
    target_date = _parse_date(args.date, "--date") if args.date else date.today()
    plan = load_snapshot(db_path=args.db)
    state = state_for_day(plan, target_date, db_path=args.db)
    print(format_day(state, target_date.isoformat()))


# --- Argument parser ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stage_prep",
        description="Stage Prep Engine - calorie, macro and meal targets for contest prep",
    )
    parser.add_argument("--db", default=DB_PATH, help=argparse.SUPPRESS)
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- assess ---
    assess_p = subparsers.add_parser("assess", help="Run a stage prep assessment")
    for field, flag, type_, help_text in ASSESSMENT_OPTIONS:
        assess_p.add_argument(flag, dest=field, type=type_,
                              default=DEFAULT_ASSESSMENT[field], help=help_text)
    for field, flag, enum_cls, help_text in ASSESSMENT_CHOICES:
        assess_p.add_argument(flag, dest=field,
                              choices=[member.value for member in enum_cls],
                              default=DEFAULT_ASSESSMENT[field], help=help_text)
    assess_p.set_defaults(func=cmd_assess)

    show_p = subparsers.add_parser("show", help="Show the saved stage prep plan")
    show_p.set_defaults(func=cmd_show)

    recalc_p = subparsers.add_parser("recalculate", help="Recalculate the plan for a new weight")
    recalc_p.add_argument("--weight", type=float, required=True, help="Current weight (kg)")
    recalc_p.set_defaults(func=cmd_recalculate)

    reset_p = subparsers.add_parser("reset", help="Delete the saved plan")
    reset_p.set_defaults(func=cmd_reset)

    foods_p = subparsers.add_parser("foods", help="List the food catalog")
    foods_p.set_defaults(func=cmd_foods)

    # --- scan ---
    scan_parser = subparsers.add_parser("scan", help="Log scanned foods")
    scan_sub = scan_parser.add_subparsers(dest="subcommand")

    add_p = scan_sub.add_parser("add", help="Add a scanned food to a meal")
    add_p.add_argument("--meal", required=True, choices=[slot.value for slot in MealSlot])
    add_p.add_argument("--food", required=True, help="Food name")
    add_p.add_argument("--calories", type=float, required=True)
    add_p.add_argument("--protein", type=float, default=0.0)
    add_p.add_argument("--carbs", type=float, default=0.0)
    add_p.add_argument("--fat", type=float, default=0.0)
    add_p.add_argument("--fiber", type=float, default=0.0)
    add_p.add_argument("--grams", type=float, default=0.0, help="Estimated weight (g)")
    add_p.add_argument("--date", help="Date/time (YYYY-MM-DD or ISO format)")
    add_p.set_defaults(func=cmd_scan_add)

    # --- track ---
    track_p = subparsers.add_parser("track", help="Show a day's meal planner totals")
    track_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    track_p.set_defaults(func=cmd_track)

    return parser


def main(argv=None):
    logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING))
    parser = build_parser()
    args = parser.parse_args(argv)
    init_db(args.db)

    if not args.command:
        parser.print_help()
        return

    if hasattr(args, "func"):
        args.func(args)
    else:
        # Subcommand not specified
        sub = parser._subparsers._group_actions[0].choices[args.command]
        sub.print_help()
