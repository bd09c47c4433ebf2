"""
Input validation: the login name-shape rule and Pydantic request schemas.
"""
import re
from datetime import date as _date
from typing import Dict, List, Optional, Any

from pydantic import BaseModel, Field, field_validator

from family.utilities.constants import NAME_PATTERN, CATEGORIES, MEAL_NAMES, THEMES
from family.utilities.errors import ValidationError

_NAME_RE = re.compile(NAME_PATTERN)
_CATEGORY_PATTERN = r'^(' + '|'.join(CATEGORIES) + r')$'


def is_valid_name(name: str) -> bool:
    """Letters, spaces and hyphens only, 2 to 30 characters."""
    return bool(_NAME_RE.fullmatch(name or ""))


def validate_login_names(first_name: str, last_name: str) -> None:
    """Raise ValidationError with one message per invalid field."""
    errors: Dict[str, str] = {}
    for field, label, value in (("firstName", "first name", first_name), ("lastName", "last name", last_name)):
        if not (value or "").strip():
            errors[field] = f"{label.capitalize()} is required"
        elif not is_valid_name(value):
            errors[field] = f"Please enter a valid {label}"
    if errors:
        raise ValidationError(errors)


def validate_meal_name(meal_name: str) -> None:
    if meal_name not in MEAL_NAMES:
        raise ValidationError({"meal": f"Unknown meal '{meal_name}', expected one of {', '.join(MEAL_NAMES)}"})


def validate_item_fields(name: str, category: str) -> None:
    errors: Dict[str, str] = {}
    if not (name or "").strip():
        errors["name"] = "Item name is required"
    if category not in CATEGORIES:
        errors["category"] = f"Category must be one of {', '.join(CATEGORIES)}"
    if errors:
        raise ValidationError(errors)


class LoginInput(BaseModel):
    """Schema for family member login."""
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    remember: bool = False

    @field_validator('first_name', 'last_name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class AdminLoginInput(BaseModel):
    password: str = ""


class MealUpdateInput(BaseModel):
    """Schema for a single meal update. Time is free-form ("HH:MM" by convention)."""
    time: str = Field(..., max_length=20)
    description: str = Field(default="", max_length=2000)
    date: Optional[_date] = None


class ShoppingItemInput(BaseModel):
    """Schema for shopping item add/edit."""
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(default="groceries", pattern=_CATEGORY_PATTERN)
    priority: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Item name cannot be empty')
        return v.strip()


class ThemeInput(BaseModel):
    theme: str = Field(..., pattern=r'^(' + '|'.join(THEMES) + r')$')


class ImportInput(BaseModel):
    """Schema for a previously exported data document."""
    users: List[Dict[str, Any]] = Field(default_factory=list)
    meals: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    shoppingList: List[Dict[str, Any]] = Field(default_factory=list)
    exportDate: Optional[str] = None
    merge: bool = False
