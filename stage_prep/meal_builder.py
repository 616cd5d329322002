"""Daily meal plan construction.

Maps calorie/macro targets plus diet type, budget and phase onto the food
catalog, producing four time-slotted meals.

Algorithm overview:
1. Split daily calories into per-slot budgets by fixed ratios
2. Pick items for each slot from a fixed decision table keyed on
   (diet type, budget level, phase)
3. Scale catalog nutrition to each portion and total it per slot
4. Replace each slot's calorie total with its ratio budget

The slot calorie figure therefore tracks the daily target rather than the
sum of the chosen items; the items describe what the meal is made of.
"""

from stage_prep.catalog import make_item
from stage_prep.config import BUDGET_ALTERNATIVES, CARB_BIAS, FIBER_PER_GRAM, MEAL_CALORIE_SPLITS
from stage_prep.intake import validate_assessment
from stage_prep.models import (
    AssessmentInput,
    BudgetLevel,
    DietType,
    EnergyMacroTargets,
    GeneratedMeal,
    MealSlot,
    Nutrition,
    StagePrepPlan,
    round_nutrition,
)


def distribute_calories(daily_calories: int) -> dict:
    """Split daily calories into per-slot budgets."""
    return {
        slot: round_nutrition(daily_calories * MEAL_CALORIE_SPLITS[slot])
        for slot in MealSlot
    }


def carb_bias(assessment: AssessmentInput) -> float:
    """Rice portion multiplier for the athlete's phase."""
    return CARB_BIAS.get(assessment.phase, 1.0)


def _morning_items(assessment: AssessmentInput) -> list:
    if assessment.diet_type == DietType.VEGETARIAN:
        soy_grams = 30 if assessment.budget_level == BudgetLevel.LOW else 40
        return [
            make_item("oats", 60),
            make_item("milk", 250),
            make_item("soy_chunks", soy_grams),
        ]
    return [
        make_item("oats", 60),
        make_item("egg_whites", 150),
        make_item("whole_egg", 50),
    ]


def _afternoon_items(assessment: AssessmentInput) -> list:
    bias = carb_bias(assessment)
    low_budget = assessment.budget_level == BudgetLevel.LOW
    if assessment.diet_type == DietType.VEGETARIAN:
        return [
            make_item("rice_cooked", round_nutrition(120 * bias)),
            make_item("paneer", 90 if low_budget else 130),
            make_item("dal_cooked", 120),
            make_item("sabzi", 100),
        ]
    # Egg whites stand in for chicken on a low budget
    protein = make_item("egg_whites", 200) if low_budget else make_item("chicken_breast", 150)
    return [
        make_item("rice_cooked", round_nutrition(130 * bias)),
        protein,
        make_item("sabzi", 100),
    ]


def _evening_items(assessment: AssessmentInput) -> list:
    if assessment.budget_level == BudgetLevel.LOW:
        return [make_item("roasted_chana", 55), make_item("banana", 110)]
    return [
        make_item("roasted_chana", 40),
        make_item("banana", 110),
        make_item("curd", 120),
    ]


def _night_items(assessment: AssessmentInput) -> list:
    if assessment.diet_type == DietType.VEGETARIAN:
        return [
            make_item("paneer", 120),
            make_item("roti", 70),
            make_item("dal_cooked", 100),
        ]
    chicken_grams = 120 if assessment.budget_level == BudgetLevel.LOW else 160
    return [
        make_item("chicken_breast", chicken_grams),
        make_item("roti", 70),
        make_item("sabzi", 120),
    ]


SLOT_ITEM_BUILDERS = {
    MealSlot.MORNING: _morning_items,
    MealSlot.AFTERNOON: _afternoon_items,
    MealSlot.EVENING: _evening_items,
    MealSlot.NIGHT: _night_items,
}


def total_meal_nutrition(items: list) -> Nutrition:
    """Sum item nutrition; fiber is estimated as 3% of the total weight."""
    total_grams = sum(item.grams for item in items)
    return Nutrition(
        calories=sum(item.calories for item in items),
        protein_g=sum(item.protein_g for item in items),
        carbs_g=sum(item.carbs_g for item in items),
        fat_g=sum(item.fat_g for item in items),
        fiber_g=round_nutrition(total_grams * FIBER_PER_GRAM),
        estimated_weight_g=total_grams,
    )


def build_meal_plan(assessment, targets: EnergyMacroTargets) -> dict:
    """Build the four daily meals for an athlete.

    Returns a dict of MealSlot -> GeneratedMeal in slot order. Raises
    InvalidInput if the assessment does not validate.
    """
    assessment = validate_assessment(assessment)
    slot_calories = distribute_calories(targets.daily_calories)

    meals = {}
    for slot in MealSlot:
        items = SLOT_ITEM_BUILDERS[slot](assessment)
        totals = total_meal_nutrition(items)
        totals.calories = slot_calories[slot]
        meals[slot] = GeneratedMeal(
            slot=slot,
            title=slot.label,
            items=items,
            totals=totals,
            budget_alternative=BUDGET_ALTERNATIVES[slot],
        )
    return meals


def format_meal_plan(plan: StagePrepPlan) -> str:
    """Format a stage prep plan's meals for display."""
    lines = [
        f"Stage Prep Meal Plan ({plan.assessment.phase.value}, "
        f"{plan.targets.daily_calories} kcal/day)",
        "=" * 50,
    ]

    for slot in MealSlot:
        meal = plan.meals[slot]
        t = meal.totals
        lines.append(f"\n{meal.title} ({t.calories} kcal):")
        lines.append("-" * 30)
        for item in meal.items:
            lines.append(f"  {item.name:<16} {item.grams:>4}g  {item.calories:>4} kcal")
        lines.append(
            f"  P:{t.protein_g}g C:{t.carbs_g}g F:{t.fat_g}g Fiber:{t.fiber_g}g"
        )
        lines.append(f"  Budget alternative: {meal.budget_alternative}")

    return "\n".join(lines)
