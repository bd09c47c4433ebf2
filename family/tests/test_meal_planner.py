import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path

from family.domain.MealPlan import DayMealPlan, format_meal_time
from family.infra.Key_Value_Store import KeyValueStore
from family.infra.Meal_Repository import MealPlanner, date_key
from family.utilities.errors import ValidationError


class TestMealPlanner(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = KeyValueStore(Path(self._tmp.name) / "store.json")
        self.planner = MealPlanner(self.store, clock=lambda: datetime(2026, 10, 18, 7, 30))

    def tearDown(self):
        self._tmp.cleanup()

    def test_unvisited_day_gets_default_plan_and_is_persisted(self):
        day = date(2026, 10, 20)
        plan = self.planner.get_plan_for_date(day)
        self.assertEqual(plan, DayMealPlan.default())
        self.assertEqual(plan.breakfast.time, "08:00")
        self.assertEqual(plan.lunch.time, "12:30")
        self.assertEqual(plan.dinner.time, "19:00")
        self.assertIn("2026-10-20", self.store.get_json("meals"))
        self.assertEqual(self.planner.get_plan_for_date(day), plan)

    def test_default_date_is_today(self):
        self.planner.get_plan_for_date()
        self.assertEqual(list(self.store.get_json("meals").keys()), ["2026-10-18"])

    def test_set_meal_leaves_other_meals_untouched(self):
        day = date(2026, 10, 18)
        before = self.planner.get_plan_for_date(day)
        self.planner.set_meal(day, "lunch", "13:15", "Lentil soup")
        after = self.planner.get_plan_for_date(day)
        self.assertEqual(after.lunch.time, "13:15")
        self.assertEqual(after.lunch.description, "Lentil soup")
        self.assertEqual(after.breakfast, before.breakfast)
        self.assertEqual(after.dinner, before.dinner)

    def test_set_meal_creates_missing_day(self):
        day = date(2026, 11, 2)
        self.planner.set_meal(day, "dinner", "20:00", "Couscous")
        plan = self.planner.get_plan_for_date(day)
        self.assertEqual(plan.dinner.description, "Couscous")
        self.assertEqual(plan.breakfast.time, "08:00")

    def test_unknown_meal_name_is_rejected(self):
        with self.assertRaises(ValidationError):
            self.planner.set_meal(date(2026, 10, 18), "brunch", "10:00", "Eggs")

    def test_all_plans_sorted_by_date(self):
        self.planner.get_plan_for_date(date(2026, 10, 21))
        self.planner.get_plan_for_date(date(2026, 10, 19))
        self.assertEqual(list(self.planner.all_plans().keys()), ["2026-10-19", "2026-10-21"])

    def test_date_key_and_display_time(self):
        self.assertEqual(date_key(date(2026, 1, 5)), "2026-01-05")
        self.assertEqual(format_meal_time("08:00"), "8:00 AM")
        self.assertEqual(format_meal_time("12:30"), "12:30 PM")
        self.assertEqual(format_meal_time("19:00"), "7:00 PM")
        self.assertEqual(format_meal_time("00:15"), "12:15 AM")


if __name__ == '__main__':
    unittest.main()
