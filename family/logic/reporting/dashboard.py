"""Admin dashboard reporting: headline numbers, chart series and the member table."""
from __future__ import annotations
from collections import Counter
from datetime import date as _date, datetime, timedelta
from typing import Dict, List, Any, Iterable

from family.domain.ShoppingItem import ShoppingItem
from family.domain.User import User
from family.infra.User_Repository import UserDirectory
from family.utilities.constants import CATEGORIES, MEAL_NAMES
from family.utilities.timeutils import parse_iso

__all__ = ["compute_dashboard_stats", "category_breakdown", "weekly_login_activity", "member_rows"]


def compute_dashboard_stats(users: List[User], items: List[ShoppingItem]) -> Dict[str, Any]:
    """Totals shown on the admin dashboard cards."""
    checked = sum(1 for item in items if item.checked)
    completion = round(checked / len(items) * 100) if items else 0
    return {
        "total_users": len(users),
        "today_meals": len(MEAL_NAMES),
        "shopping_items": len(items),
        "checked_items": checked,
        "completion_rate": completion,
    }


def category_breakdown(items: Iterable[ShoppingItem]) -> Dict[str, Any]:
    """Item counts per category for the doughnut chart, every category present."""
    counts = Counter(item.category for item in items)
    return {
        "labels": [c.capitalize() for c in CATEGORIES],
        "categories": list(CATEGORIES),
        "data": [counts.get(c, 0) for c in CATEGORIES],
    }


def weekly_login_activity(users: Iterable[User], today: _date) -> Dict[str, Any]:
    """Members whose last login fell on each of the past seven days (oldest first).

    Only the most recent login of each member is stored, so a member counts
    once, on the day of their latest visit.
    """
    days = [today - timedelta(days=i) for i in range(6, -1, -1)]
    per_day = Counter()
    for user in users:
        last = parse_iso(user.last_login, like=datetime.combine(today, datetime.min.time()))
        if last is not None:
            per_day[last.date()] += 1
    return {
        "labels": [d.strftime("%a") for d in days],
        "dates": [d.isoformat() for d in days],
        "data": [per_day.get(d, 0) for d in days],
    }


def member_rows(users: Iterable[User], now: datetime) -> List[Dict[str, Any]]:
    rows = []
    for user in users:
        activity = UserDirectory.activity(user, now)
        rows.append({
            "name": user.full_name,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "loginCount": user.login_count,
            "lastLogin": user.last_login,
            "last_login_text": activity["last_login_text"],
            "status": "Active" if activity["is_active"] else "Inactive",
        })
    return rows
