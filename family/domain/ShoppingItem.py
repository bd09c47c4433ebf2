"""ShoppingItem domain entity: one entry of the shared household shopping list."""
from typing import Optional

from family.utilities.constants import CATEGORIES


class ShoppingItem:
    def __init__(self, id: str, name: str = "", category: str = "other", priority: bool = False,
                 checked: bool = False, added_date: Optional[str] = None):
        self.id = id
        self.name = name
        self.category = category if category in CATEGORIES else "other"
        self.priority = bool(priority)
        self.checked = bool(checked)
        self.added_date = added_date

    def sort_key(self):
        '''Display order: priority items first, then unchecked before checked.'''
        return (not self.priority, self.checked)

    def __str__(self) -> str:
        flags = []
        if self.priority:
            flags.append("priority")
        if self.checked:
            flags.append("checked")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"{self.name} ({self.category}){suffix}"

    __repr__ = __str__

    def __eq__(self, other):
        return isinstance(other, ShoppingItem) and self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates a ShoppingItem from its stored camelCase record. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return ShoppingItem(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            category=str(d.get("category", "other")),
            priority=d.get("priority") is True,
            checked=d.get("checked") is True,
            added_date=d.get("addedDate"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "priority": self.priority,
            "checked": self.checked,
            "addedDate": self.added_date,
        }
