"""Meal planner running totals and scanned-food tracking.

A stage prep plan seeds each slot's calorie target and base nutrition;
foods added afterwards (for example from a food scan) accumulate on top.
Scans are also logged to the database so a day's totals can be rebuilt.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from stage_prep.config import (
    DEFAULT_MEAL_BASE_NUTRITION,
    DEFAULT_MEAL_TARGETS,
    STATUS_LOW_BELOW,
    STATUS_ON_TRACK_UP_TO,
)
from stage_prep.db import DB_PATH, get_connection
from stage_prep.models import MealSlot, Nutrition, Phase, StagePrepPlan


@dataclass
class PhaseStrategy:
    """The phase of the plan currently driving the meal planner."""
    phase: Phase
    locked_at: datetime


@dataclass
class ScanEntry:
    """A food added to a meal slot."""
    id: Optional[int]
    meal_slot: MealSlot
    food_name: str
    nutrition: Nutrition
    added_at: datetime


def _default_targets() -> dict:
    return {slot: DEFAULT_MEAL_TARGETS[slot] for slot in MealSlot}


def _default_base_nutrition() -> dict:
    return {slot: Nutrition(**DEFAULT_MEAL_BASE_NUTRITION[slot]) for slot in MealSlot}


def _empty_additions() -> dict:
    return {slot: Nutrition.zero() for slot in MealSlot}


def meal_status(consumed_calories: float, target_calories: float) -> str:
    """Classify a slot as Low, On Track or Over against its target."""
    if target_calories <= 0:
        return "Over" if consumed_calories > 0 else "On Track"
    ratio = consumed_calories / target_calories
    if ratio < STATUS_LOW_BELOW:
        return "Low"
    if ratio <= STATUS_ON_TRACK_UP_TO:
        return "On Track"
    return "Over"


@dataclass
class MealPlannerState:
    """Per-slot targets, base nutrition and accumulated additions."""
    meal_targets: dict = field(default_factory=_default_targets)
    base_nutrition: dict = field(default_factory=_default_base_nutrition)
    additions: dict = field(default_factory=_empty_additions)
    scan_history: list = field(default_factory=list)  # List[ScanEntry], newest first
    phase_strategy: Optional[PhaseStrategy] = None

    def apply_stage_prep_plan(self, plan: StagePrepPlan, locked_at: Optional[datetime] = None) -> None:
        """Replace targets and base nutrition with those of a plan.

        Additions already made are kept.
        """
        self.meal_targets = plan.meal_targets()
        self.base_nutrition = plan.meal_base_nutrition()
        self.phase_strategy = PhaseStrategy(
            phase=plan.assessment.phase,
            locked_at=locked_at or datetime.now(),
        )

    def add_scan(
        self,
        meal_slot: MealSlot,
        food_name: str,
        nutrition: Nutrition,
        added_at: Optional[datetime] = None,
        scan_id: Optional[int] = None,
    ) -> ScanEntry:
        """Accumulate a food into a slot and record it in the history."""
        meal_slot = MealSlot(meal_slot)
        entry = ScanEntry(
            id=scan_id,
            meal_slot=meal_slot,
            food_name=food_name,
            nutrition=nutrition,
            added_at=added_at or datetime.now(),
        )
        self.additions[meal_slot] = self.additions[meal_slot] + nutrition
        self.scan_history.insert(0, entry)
        return entry

    def get_meal_target(self, meal_slot: MealSlot) -> float:
        return self.meal_targets[meal_slot]

    def get_base_nutrition(self, meal_slot: MealSlot) -> Nutrition:
        return self.base_nutrition[meal_slot]

    def consumed(self, meal_slot: MealSlot) -> Nutrition:
        """Base nutrition plus everything added to the slot."""
        return self.base_nutrition[meal_slot] + self.additions[meal_slot]

    def status(self, meal_slot: MealSlot) -> str:
        return meal_status(self.consumed(meal_slot).calories, self.meal_targets[meal_slot])


def log_scan(
    meal_slot: MealSlot,
    food_name: str,
    nutrition: Nutrition,
    added_at: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> int:
    """Log a scanned food against a meal slot. Returns the log entry ID."""
    if added_at is None:
        added_at = datetime.now()
    meal_slot = MealSlot(meal_slot)

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO scan_log (meal_slot, food_name, calories, protein_g, carbs_g,
               fat_g, fiber_g, estimated_weight_g, added_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (meal_slot.value, food_name, nutrition.calories, nutrition.protein_g,
             nutrition.carbs_g, nutrition.fat_g, nutrition.fiber_g,
             nutrition.estimated_weight_g, added_at.isoformat()),
        )
        return cursor.lastrowid


def get_scans(start_date: date, end_date: date, db_path: str = DB_PATH) -> list:
    """Get all scan log entries within a date range, oldest first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM scan_log
               WHERE date(added_at) >= ? AND date(added_at) <= ?
               ORDER BY added_at, id""",
            (start_date.isoformat(), end_date.isoformat()),
        ).fetchall()

    return [
        ScanEntry(
            id=row["id"],
            meal_slot=MealSlot(row["meal_slot"]),
            food_name=row["food_name"],
            nutrition=Nutrition(
                calories=row["calories"],
                protein_g=row["protein_g"],
                carbs_g=row["carbs_g"],
                fat_g=row["fat_g"],
                fiber_g=row["fiber_g"],
                estimated_weight_g=row["estimated_weight_g"],
            ),
            added_at=datetime.fromisoformat(row["added_at"]),
        )
        for row in rows
    ]


def daily_scan_totals(target_date: date, db_path: str = DB_PATH) -> dict:
    """Sum a day's scans per meal slot."""
    totals = _empty_additions()
    for entry in get_scans(target_date, target_date, db_path):
        totals[entry.meal_slot] = totals[entry.meal_slot] + entry.nutrition
    return totals


def state_for_day(
    plan: Optional[StagePrepPlan], target_date: date, db_path: str = DB_PATH
) -> MealPlannerState:
    """Rebuild the meal planner for a day from a plan and that day's scans.

    Without a plan the default targets and base nutrition apply.
    """
    state = MealPlannerState()
    if plan is not None:
        state.apply_stage_prep_plan(plan, locked_at=datetime.combine(target_date, datetime.min.time()))
    for entry in get_scans(target_date, target_date, db_path):
        state.add_scan(entry.meal_slot, entry.food_name, entry.nutrition,
                       added_at=entry.added_at, scan_id=entry.id)
    return state


def format_day(state: MealPlannerState, label: str) -> str:
    """Format a day's meal planner state for display."""
    lines = [f"Meal Planner: {label}", "=" * 45]
    if state.phase_strategy:
        lines.append(f"Stage prep strategy: {state.phase_strategy.phase.value}")
    else:
        lines.append("No stage prep plan applied (default targets).")

    for slot in MealSlot:
        consumed = state.consumed(slot)
        target = state.get_meal_target(slot)
        lines.append(
            f"\n  {slot.label:<10} {consumed.calories:.0f} / {target:.0f} kcal  "
            f"[{state.status(slot)}]"
        )
        lines.append(
            f"             P:{consumed.protein_g:.0f}g C:{consumed.carbs_g:.0f}g "
            f"F:{consumed.fat_g:.0f}g"
        )

    if state.scan_history:
        lines.append("\nScanned foods:")
        for entry in state.scan_history:
            lines.append(
                f"  {entry.added_at:%H:%M} {entry.meal_slot.label:<10} "
                f"{entry.food_name} ({entry.nutrition.calories:.0f} kcal)"
            )
    return "\n".join(lines)
