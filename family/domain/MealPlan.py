"""Meal plan domain entities: one DayMealPlan (breakfast/lunch/dinner) per calendar day."""
from typing import Dict

from family.utilities.constants import DEFAULT_MEALS, MEAL_NAMES


def format_meal_time(time: str) -> str:
    '''Converts "HH:MM" into 12-hour display form, e.g. "19:00" -> "7:00 PM".'''
    try:
        hours, minutes = time.split(":", 1)
        hour = int(hours)
    except (AttributeError, ValueError):
        return time or ""
    ampm = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minutes} {ampm}"


class Meal:
    def __init__(self, time: str = "", description: str = ""):
        self.time = time
        self.description = description

    @property
    def display_time(self) -> str:
        return format_meal_time(self.time)

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return Meal(str(d.get("time", "")), str(d.get("description", "")))

    def to_dict(self):
        return {"time": self.time, "description": self.description}

    def __eq__(self, other):
        return isinstance(other, Meal) and self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.time} {self.description}"

    __repr__ = __str__


class DayMealPlan:
    def __init__(self, meals: Dict[str, Meal]):
        self.meals = meals

    @staticmethod
    def default() -> "DayMealPlan":
        return DayMealPlan({name: Meal.from_dict(DEFAULT_MEALS[name]) for name in MEAL_NAMES})

    def __getitem__(self, meal_name: str) -> Meal:
        return self.meals[meal_name]

    @property
    def breakfast(self) -> Meal:
        return self.meals["breakfast"]

    @property
    def lunch(self) -> Meal:
        return self.meals["lunch"]

    @property
    def dinner(self) -> Meal:
        return self.meals["dinner"]

    @staticmethod
    def from_dict(data):
        '''Builds a plan from its stored record; missing meals fall back to the defaults.'''
        d = data if isinstance(data, dict) else {}
        meals = {}
        for name in MEAL_NAMES:
            meals[name] = Meal.from_dict(d[name]) if isinstance(d.get(name), dict) \
                else Meal.from_dict(DEFAULT_MEALS[name])
        return DayMealPlan(meals)

    def to_dict(self):
        return {name: self.meals[name].to_dict() for name in MEAL_NAMES if name in self.meals}

    def __eq__(self, other):
        return isinstance(other, DayMealPlan) and self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return ", ".join(f"{name}: {meal}" for name, meal in self.meals.items())

    __repr__ = __str__
