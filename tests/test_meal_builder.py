"""Tests for daily meal plan construction."""

import unittest

from stage_prep.config import MEAL_CALORIE_SPLITS
from stage_prep.intake import InvalidInput
from stage_prep.macro_calculator import compute_targets
from stage_prep.meal_builder import (
    build_meal_plan,
    carb_bias,
    distribute_calories,
    format_meal_plan,
    total_meal_nutrition,
)
from stage_prep.catalog import make_item
from stage_prep.engine import analyze
from stage_prep.models import (
    AssessmentInput,
    BudgetLevel,
    DietType,
    ExperienceLevel,
    MealSlot,
    Phase,
)


def _assessment(**overrides):
    values = dict(
        age=24, height_cm=173, current_weight_kg=78, target_stage_weight_kg=72,
        body_fat_percent=14, experience_level=ExperienceLevel.INTERMEDIATE,
        phase=Phase.CUTTING, training_sessions_per_week=6, cardio_sessions_per_week=4,
        diet_type=DietType.NON_VEGETARIAN, budget_level=BudgetLevel.MEDIUM,
        fullness_priority=70, fat_loss_priority=82, dryness_priority=75,
        strength_priority=68,
    )
    values.update(overrides)
    return AssessmentInput(**values)


def _meals(**overrides):
    assessment = _assessment(**overrides)
    return build_meal_plan(assessment, compute_targets(assessment))


def _grams(meal):
    return {item.food_id: item.grams for item in meal.items}


class TestDistributeCalories(unittest.TestCase):
    def test_ratios_sum_to_one(self):
        self.assertEqual(sum(MEAL_CALORIE_SPLITS.values()), 1.0)

    def test_split(self):
        slots = distribute_calories(2508)
        self.assertEqual(slots[MealSlot.MORNING], 652)
        self.assertEqual(slots[MealSlot.AFTERNOON], 853)
        self.assertEqual(slots[MealSlot.EVENING], 351)
        self.assertEqual(slots[MealSlot.NIGHT], 652)

    def test_zero_calories(self):
        self.assertEqual(set(distribute_calories(0).values()), {0})


class TestCarbBias(unittest.TestCase):
    def test_bias_by_phase(self):
        self.assertEqual(carb_bias(_assessment(phase=Phase.PEAK_WEEK)), 1.12)
        self.assertEqual(carb_bias(_assessment(phase=Phase.BULKING)), 1.06)
        self.assertEqual(carb_bias(_assessment(phase=Phase.CUTTING)), 1.0)

    def test_rice_portions(self):
        cases = [
            (Phase.PEAK_WEEK, DietType.VEGETARIAN, 134),
            (Phase.PEAK_WEEK, DietType.NON_VEGETARIAN, 146),
            (Phase.BULKING, DietType.VEGETARIAN, 127),
            (Phase.BULKING, DietType.NON_VEGETARIAN, 138),
            (Phase.CUTTING, DietType.VEGETARIAN, 120),
            (Phase.CUTTING, DietType.NON_VEGETARIAN, 130),
        ]
        for phase, diet, grams in cases:
            afternoon = _meals(phase=phase, diet_type=diet)[MealSlot.AFTERNOON]
            self.assertEqual(_grams(afternoon)["rice_cooked"], grams,
                             f"Failed for phase={phase.value} diet={diet.value}")


class TestSlotItems(unittest.TestCase):
    def test_morning_non_veg(self):
        morning = _meals()[MealSlot.MORNING]
        self.assertEqual(_grams(morning), {"oats": 60, "egg_whites": 150, "whole_egg": 50})

    def test_morning_veg_soy_by_budget(self):
        low = _meals(diet_type=DietType.VEGETARIAN, budget_level=BudgetLevel.LOW)
        high = _meals(diet_type=DietType.VEGETARIAN, budget_level=BudgetLevel.HIGH)
        self.assertEqual(_grams(low[MealSlot.MORNING]), {"oats": 60, "milk": 250, "soy_chunks": 30})
        self.assertEqual(_grams(high[MealSlot.MORNING])["soy_chunks"], 40)

    def test_afternoon_veg_paneer_by_budget(self):
        low = _meals(diet_type=DietType.VEGETARIAN, budget_level=BudgetLevel.LOW)
        medium = _meals(diet_type=DietType.VEGETARIAN)
        self.assertEqual(_grams(low[MealSlot.AFTERNOON]),
                         {"rice_cooked": 120, "paneer": 90, "dal_cooked": 120, "sabzi": 100})
        self.assertEqual(_grams(medium[MealSlot.AFTERNOON])["paneer"], 130)

    def test_afternoon_non_veg_protein_by_budget(self):
        low = _meals(budget_level=BudgetLevel.LOW)[MealSlot.AFTERNOON]
        medium = _meals()[MealSlot.AFTERNOON]
        self.assertEqual(_grams(low), {"rice_cooked": 130, "egg_whites": 200, "sabzi": 100})
        self.assertEqual(_grams(medium), {"rice_cooked": 130, "chicken_breast": 150, "sabzi": 100})

    def test_evening_by_budget(self):
        low = _meals(budget_level=BudgetLevel.LOW)[MealSlot.EVENING]
        high = _meals(budget_level=BudgetLevel.HIGH)[MealSlot.EVENING]
        self.assertEqual(_grams(low), {"roasted_chana": 55, "banana": 110})
        self.assertEqual(low.totals.estimated_weight_g, 165)
        self.assertEqual(low.totals.fiber_g, 5)
        self.assertEqual(_grams(high), {"roasted_chana": 40, "banana": 110, "curd": 120})

    def test_evening_ignores_diet_type(self):
        veg = _meals(diet_type=DietType.VEGETARIAN)[MealSlot.EVENING]
        non_veg = _meals()[MealSlot.EVENING]
        self.assertEqual(veg.items, non_veg.items)

    def test_night(self):
        veg = _meals(diet_type=DietType.VEGETARIAN)[MealSlot.NIGHT]
        low = _meals(budget_level=BudgetLevel.LOW)[MealSlot.NIGHT]
        medium = _meals()[MealSlot.NIGHT]
        self.assertEqual(_grams(veg), {"paneer": 120, "roti": 70, "dal_cooked": 100})
        self.assertEqual(_grams(low), {"chicken_breast": 120, "roti": 70, "sabzi": 120})
        self.assertEqual(_grams(medium)["chicken_breast"], 160)


class TestMealTotals(unittest.TestCase):
    def test_morning_totals(self):
        morning = _meals()[MealSlot.MORNING]
        self.assertEqual(morning.totals.protein_g, 34)
        self.assertEqual(morning.totals.carbs_g, 42)
        self.assertEqual(morning.totals.fat_g, 9)
        self.assertEqual(morning.totals.fiber_g, 8)
        self.assertEqual(morning.totals.estimated_weight_g, 260)

    def test_calories_follow_slot_budget(self):
        meals = _meals()
        self.assertEqual(meals[MealSlot.MORNING].totals.calories, 652)
        self.assertEqual(meals[MealSlot.AFTERNOON].totals.calories, 853)
        self.assertEqual(meals[MealSlot.EVENING].totals.calories, 351)
        self.assertEqual(meals[MealSlot.NIGHT].totals.calories, 652)
        # Item calories are kept as-is: 233 + 78 + 72
        self.assertEqual(sum(item.calories for item in meals[MealSlot.MORNING].items), 383)

    def test_total_meal_nutrition(self):
        items = [make_item("oats", 60), make_item("egg_whites", 150), make_item("whole_egg", 50)]
        totals = total_meal_nutrition(items)
        self.assertEqual(totals.calories, 383)
        self.assertEqual(totals.protein_g, 34)

    def test_empty_items(self):
        totals = total_meal_nutrition([])
        self.assertEqual(totals.calories, 0)
        self.assertEqual(totals.fiber_g, 0)


class TestBuildMealPlan(unittest.TestCase):
    def test_slot_order_and_titles(self):
        meals = _meals()
        self.assertEqual(list(meals), [MealSlot.MORNING, MealSlot.AFTERNOON,
                                       MealSlot.EVENING, MealSlot.NIGHT])
        self.assertEqual([meal.title for meal in meals.values()],
                         ["Morning", "Afternoon", "Evening", "Night"])

    def test_deterministic(self):
        assessment = _assessment(diet_type=DietType.VEGETARIAN, phase=Phase.PEAK_WEEK)
        targets = compute_targets(assessment)
        self.assertEqual(build_meal_plan(assessment, targets),
                         build_meal_plan(assessment, targets))

    def test_budget_alternatives(self):
        meals = _meals()
        self.assertIn("soy chunks", meals[MealSlot.MORNING].budget_alternative)
        self.assertIn("Rice + dal + eggs", meals[MealSlot.AFTERNOON].budget_alternative)
        self.assertIn("Roasted chana", meals[MealSlot.EVENING].budget_alternative)
        self.assertIn("Roti + paneer/chicken", meals[MealSlot.NIGHT].budget_alternative)

    def test_items_independent_of_calorie_target(self):
        heavy = _meals(current_weight_kg=110)
        light = _meals(current_weight_kg=60)
        for slot in MealSlot:
            self.assertEqual(heavy[slot].items, light[slot].items)

    def test_invalid_assessment(self):
        assessment = _assessment()
        targets = compute_targets(assessment)
        with self.assertRaises(InvalidInput):
            build_meal_plan(_assessment(diet_type="Vegan"), targets)


class TestFormatMealPlan(unittest.TestCase):
    def test_format(self):
        text = format_meal_plan(analyze(_assessment()))
        self.assertIn("Morning (652 kcal)", text)
        self.assertIn("Oats", text)
        self.assertIn("Budget alternative:", text)


if __name__ == "__main__":
    unittest.main()
