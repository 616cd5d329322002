"""Tests for assessment validation."""

import unittest
from datetime import date

from stage_prep.config import DEFAULT_ASSESSMENT
from stage_prep.intake import InvalidInput, validate_assessment
from stage_prep.models import AssessmentInput, BudgetLevel, DietType, Phase


def _form(**overrides):
    form = dict(DEFAULT_ASSESSMENT)
    form.update(overrides)
    return form


class TestValidateAssessment(unittest.TestCase):
    def test_default_form(self):
        assessment = validate_assessment(_form())
        self.assertIsInstance(assessment, AssessmentInput)
        self.assertEqual(assessment.phase, Phase.CUTTING)
        self.assertEqual(assessment.diet_type, DietType.NON_VEGETARIAN)
        self.assertEqual(assessment.budget_level, BudgetLevel.MEDIUM)
        self.assertIsNone(assessment.competition_date)
        self.assertEqual(assessment.total_sessions, 10)

    def test_accepts_assessment_instance(self):
        assessment = validate_assessment(_form())
        self.assertEqual(validate_assessment(assessment), assessment)

    def test_rejects_other_types(self):
        with self.assertRaises(InvalidInput):
            validate_assessment([24, 173])

    def test_missing_field(self):
        form = _form()
        del form["height_cm"]
        with self.assertRaises(InvalidInput) as ctx:
            validate_assessment(form)
        self.assertEqual(ctx.exception.field, "height_cm")
        self.assertEqual(str(ctx.exception), "height_cm: is required")

    def test_priorities_optional(self):
        form = _form()
        del form["dryness_priority"]
        form["strength_priority"] = None
        assessment = validate_assessment(form)
        self.assertEqual(assessment.dryness_priority, 50)
        self.assertEqual(assessment.strength_priority, 50)

    def test_priorities_clamped(self):
        assessment = validate_assessment(_form(fat_loss_priority=140, fullness_priority=-20))
        self.assertEqual(assessment.fat_loss_priority, 100)
        self.assertEqual(assessment.fullness_priority, 0)

    def test_negative_age(self):
        with self.assertRaises(InvalidInput) as ctx:
            validate_assessment(_form(age=-5))
        self.assertEqual(ctx.exception.field, "age")

    def test_fractional_age(self):
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(age=24.5))

    def test_whole_float_age_accepted(self):
        self.assertEqual(validate_assessment(_form(age=24.0)).age, 24)

    def test_zero_height(self):
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(height_cm=0))

    def test_bool_is_not_a_number(self):
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(current_weight_kg=True))

    def test_string_is_not_a_number(self):
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(current_weight_kg="78"))

    def test_non_finite(self):
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(current_weight_kg=float("nan")))
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(height_cm=float("inf")))

    def test_body_fat_bounds(self):
        self.assertEqual(validate_assessment(_form(body_fat_percent=0)).body_fat_percent, 0)
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(body_fat_percent=101))

    def test_negative_sessions(self):
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(cardio_sessions_per_week=-1))

    def test_enum_spellings(self):
        self.assertEqual(validate_assessment(_form(phase="peak week")).phase, Phase.PEAK_WEEK)
        self.assertEqual(validate_assessment(_form(phase="PEAK_WEEK")).phase, Phase.PEAK_WEEK)
        self.assertEqual(validate_assessment(_form(phase="PeakWeek")).phase, Phase.PEAK_WEEK)
        self.assertEqual(validate_assessment(_form(diet_type="NonVegetarian")).diet_type,
                         DietType.NON_VEGETARIAN)
        self.assertEqual(validate_assessment(_form(diet_type="vegetarian")).diet_type,
                         DietType.VEGETARIAN)

    def test_unknown_enum(self):
        with self.assertRaises(InvalidInput) as ctx:
            validate_assessment(_form(phase="Maintenance"))
        self.assertEqual(ctx.exception.field, "phase")
        self.assertIn("Peak Week", ctx.exception.constraint)

    def test_competition_date(self):
        assessment = validate_assessment(_form(competition_date="2026-11-20"))
        self.assertEqual(assessment.competition_date, date(2026, 11, 20))
        self.assertIsNone(validate_assessment(_form(competition_date="")).competition_date)
        with self.assertRaises(InvalidInput):
            validate_assessment(_form(competition_date="next month"))


if __name__ == "__main__":
    unittest.main()
