"""Meal planner: one DayMealPlan per calendar day, materialized from defaults on first read."""
import logging
from datetime import date
from typing import Dict, Optional

from family.domain.MealPlan import DayMealPlan, Meal
from family.events.Event_Bus import GLOBAL_EVENT_BUS, MEALS_UPDATED
from family.infra.Key_Value_Store import KeyValueStore
from family.utilities.constants import STORAGE_KEYS, DATE_KEY_FORMAT
from family.utilities.timeutils import Clock, system_clock
from family.utilities.validators import validate_meal_name

logger = logging.getLogger(__name__)


def date_key(day: date) -> str:
    return day.strftime(DATE_KEY_FORMAT)


class MealPlanner:
    def __init__(self, store: KeyValueStore, clock: Clock = system_clock, event_bus=None):
        self.store = store
        self.clock = clock
        self._event_bus = event_bus or GLOBAL_EVENT_BUS

    def today(self) -> date:
        return self.clock().date()

    def _load(self) -> Dict[str, dict]:
        data = self.store.get_json(STORAGE_KEYS["MEALS"], {})
        if not isinstance(data, dict):
            logger.error("Stored meals is not a mapping, ignoring it")
            return {}
        return data

    def _save(self, all_meals: Dict[str, dict]):
        self.store.set_json(STORAGE_KEYS["MEALS"], all_meals)

    def get_plan_for_date(self, day: Optional[date] = None) -> DayMealPlan:
        """Return the plan for ``day`` (today by default), persisting the defaults if absent."""
        key = date_key(day or self.today())
        all_meals = self._load()
        if not isinstance(all_meals.get(key), dict):
            plan = DayMealPlan.default()
            all_meals[key] = plan.to_dict()
            self._save(all_meals)
            return plan
        return DayMealPlan.from_dict(all_meals[key])

    def set_meal(self, day: Optional[date], meal_name: str, time: str, description: str) -> DayMealPlan:
        '''Overwrite one meal of the day, leaving the other two untouched.'''
        validate_meal_name(meal_name)
        key = date_key(day or self.today())
        all_meals = self._load()
        plan = DayMealPlan.from_dict(all_meals.get(key))
        plan.meals[meal_name] = Meal(time, description)
        all_meals[key] = plan.to_dict()
        self._save(all_meals)
        logger.info("Meal %s for %s set to %s", meal_name, key, time)
        self._event_bus.publish(MEALS_UPDATED, {"date": key, "meal": meal_name})
        return plan

    def all_plans(self) -> Dict[str, DayMealPlan]:
        return {key: DayMealPlan.from_dict(value) for key, value in sorted(self._load().items())}
