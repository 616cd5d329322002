"""Tests for the result view charts and tables."""

import unittest

from pages.components.charts import (
    create_macro_pie_chart,
    create_slot_calorie_chart,
    meal_items_frame,
    plan_summary_frame,
)
from stage_prep.config import DEFAULT_ASSESSMENT
from stage_prep.engine import analyze
from stage_prep.models import MealSlot


class TestCharts(unittest.TestCase):
    def setUp(self):
        self.plan = analyze(DEFAULT_ASSESSMENT)

    def test_macro_pie_values(self):
        fig = create_macro_pie_chart(self.plan.targets)
        self.assertEqual(list(fig.data[0].values), [187 * 4, 307 * 4, 59 * 9])

    def test_slot_calorie_chart(self):
        fig = create_slot_calorie_chart(self.plan)
        self.assertEqual(len(fig.data), 2)
        self.assertEqual(list(fig.data[0].y), [652, 853, 351, 652])
        self.assertEqual(list(fig.data[0].x), ["Morning", "Afternoon", "Evening", "Night"])
        self.assertEqual(fig.data[1].y[0], 383)


class TestFrames(unittest.TestCase):
    def setUp(self):
        self.plan = analyze(DEFAULT_ASSESSMENT)

    def test_meal_items_frame(self):
        df = meal_items_frame(self.plan.meals[MealSlot.MORNING])
        self.assertEqual(len(df), 3)
        self.assertEqual(list(df["Grams"]), [60, 150, 50])
        self.assertEqual(df.iloc[0]["Food"], "Oats")

    def test_plan_summary_frame(self):
        df = plan_summary_frame(self.plan)
        self.assertEqual(list(df.index), ["Morning", "Afternoon", "Evening", "Night"])
        self.assertEqual(df.loc["Evening", "Calories"], 351)
        self.assertEqual(df.loc["Morning", "Fiber (g)"], 8)


if __name__ == "__main__":
    unittest.main()
