from typing import Final

STORAGE_KEYS: Final[dict[str, str]] = {
    "USERS": "users",
    "CURRENT_USER": "current_user",
    "ADMIN_SESSION": "admin_session",
    "LAST_ACTIVITY": "last_activity",
    "REMEMBER_ME": "remember_me",
    "MEALS": "meals",
    "SHOPPING_LIST": "shopping_list",
    "THEME": "theme",
}

DATE_KEY_FORMAT: Final[str] = "%Y-%m-%d"
MEAL_NAMES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")
CATEGORIES: Final[tuple[str, ...]] = ("groceries", "household", "personal", "other")
THEMES: Final[tuple[str, ...]] = ("light", "dark")

# 2-30 characters, letters / spaces / hyphens
NAME_PATTERN: Final[str] = r"^[a-zA-Z\s-]{2,30}$"

DEFAULT_MEALS: Final[dict[str, dict[str, str]]] = {
    "breakfast": {
        "time": "08:00",
        "description": "Pancakes with fresh berries, maple syrup, and a glass of orange juice. A delightful start to your day!",
    },
    "lunch": {
        "time": "12:30",
        "description": "Grilled chicken salad with mixed greens, cherry tomatoes, cucumbers, and balsamic dressing. Light and nutritious!",
    },
    "dinner": {
        "time": "19:00",
        "description": "Homemade spaghetti bolognese with garlic bread and a fresh garden salad. Family favorite!",
    },
}

# (id, name, category, priority)
DEFAULT_SHOPPING_ITEMS: Final[list[tuple[str, str, str, bool]]] = [
    ("item_1", "Fresh Milk", "groceries", False),
    ("item_2", "Whole Wheat Bread", "groceries", False),
    ("item_3", "Fresh Vegetables", "groceries", True),
    ("item_4", "Laundry Detergent", "household", False),
    ("item_5", "Toilet Paper", "household", True),
]
