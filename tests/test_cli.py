"""Tests for the command-line interface."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from stage_prep.cli import main
from stage_prep.snapshot_store import load_snapshot


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def _run(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--db", self.db_path, *argv])
        return out.getvalue()

    def test_assess_defaults(self):
        output = self._run("assess")
        self.assertIn("Target:   2508 kcal/day", output)
        self.assertIn("Morning (652 kcal)", output)
        self.assertIn("Plan saved.", output)
        self.assertEqual(load_snapshot(db_path=self.db_path).targets.daily_calories, 2508)

    def test_assess_options(self):
        output = self._run("assess", "--phase", "Peak Week", "--diet", "Vegetarian",
                           "--budget", "Low", "--competition-date", "2026-11-20")
        self.assertIn("Peak Week", output)
        plan = load_snapshot(db_path=self.db_path)
        self.assertEqual(plan.assessment.diet_type.value, "Vegetarian")
        self.assertEqual(plan.assessment.competition_date.isoformat(), "2026-11-20")

    def test_assess_invalid_input(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("assess", "--age", "-5")
        self.assertEqual(ctx.exception.code, 1)
        self.assertIsNone(load_snapshot(db_path=self.db_path))

    def test_show(self):
        self._run("assess")
        output = self._run("show")
        self.assertIn("Phase:    Cutting", output)
        self.assertIn("Contest:  Not set", output)

    def test_show_without_plan(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("show")
        self.assertEqual(ctx.exception.code, 1)

    def test_recalculate(self):
        self._run("assess")
        output = self._run("recalculate", "--weight", "80")
        self.assertIn("Protein:  192g", output)
        self.assertEqual(load_snapshot(db_path=self.db_path).assessment.current_weight_kg, 80)

    def test_recalculate_invalid_weight(self):
        self._run("assess")
        with self.assertRaises(SystemExit) as ctx:
            self._run("recalculate", "--weight", "0")
        self.assertEqual(ctx.exception.code, 1)

    def test_reset(self):
        self._run("assess")
        self.assertIn("Stage prep plan deleted.", self._run("reset"))
        self.assertIn("No stage prep plan to delete.", self._run("reset"))

    def test_foods(self):
        output = self._run("foods")
        self.assertIn("roasted_chana", output)
        self.assertIn("(values per 100g)", output)

    def test_scan_and_track(self):
        self._run("assess")
        output = self._run("scan", "add", "--meal", "morning", "--food", "Banana",
                           "--calories", "105", "--carbs", "27", "--date", "2026-02-05T08:00")
        self.assertIn("Logged: Banana to morning (105 kcal)", output)

        output = self._run("track", "--date", "2026-02-05")
        self.assertIn("Meal Planner: 2026-02-05", output)
        self.assertIn("757 / 652 kcal  [Over]", output)
        self.assertIn("Banana (105 kcal)", output)

    def test_track_without_plan(self):
        output = self._run("track", "--date", "2026-02-05")
        self.assertIn("No stage prep plan applied", output)
        self.assertIn("650 / 800 kcal  [Low]", output)

    def test_track_bad_date(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run("track", "--date", "yesterday")
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
