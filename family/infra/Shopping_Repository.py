"""Shopping list store: the household's shared list of ShoppingItem records.

Items are a set keyed by ``id``. Lookups by id that miss are silent no-ops,
the list is seeded with five defaults the first time it is read.
"""
import logging
import random
import string
from datetime import datetime
from typing import List, Optional

from family.domain.ShoppingItem import ShoppingItem
from family.events.Event_Bus import GLOBAL_EVENT_BUS, SHOPPING_CHANGED
from family.infra.Key_Value_Store import KeyValueStore
from family.utilities.constants import STORAGE_KEYS, DEFAULT_SHOPPING_ITEMS
from family.utilities.errors import StorageParseError
from family.utilities.timeutils import Clock, system_clock, to_iso, to_ms
from family.utilities.validators import validate_item_fields

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def default_items(now: datetime) -> List[ShoppingItem]:
    added = to_iso(now)
    return [ShoppingItem(item_id, name, category, priority, False, added)
            for item_id, name, category, priority in DEFAULT_SHOPPING_ITEMS]


def generate_item_id(now: datetime) -> str:
    """Time-based id with a random suffix, e.g. item_1760000000000_k3j9x0a1b."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"item_{to_ms(now)}_{suffix}"


def sort_for_display(items: List[ShoppingItem]) -> List[ShoppingItem]:
    # sorted() is stable, equal keys keep storage order
    return sorted(items, key=lambda item: item.sort_key())


class ShoppingListStore:
    def __init__(self, store: KeyValueStore, clock: Clock = system_clock, event_bus=None):
        self.store = store
        self.clock = clock
        self._event_bus = event_bus or GLOBAL_EVENT_BUS

    # --- Persistence -------------------------------------------------------
    def _load(self) -> List[ShoppingItem]:
        key = STORAGE_KEYS["SHOPPING_LIST"]
        try:
            data = self.store.load_json(key)
        except StorageParseError as e:
            logger.error("%s; using the default shopping list", e)
            return default_items(self.clock())
        if data is None:
            items = default_items(self.clock())
            self._save(items)
            logger.info("Seeded default shopping list with %d items", len(items))
            return items
        if not isinstance(data, list):
            logger.error("Stored shopping list is not a list; using the default shopping list")
            return default_items(self.clock())
        return [ShoppingItem.from_dict(entry) for entry in data if isinstance(entry, dict)]

    def _save(self, items: List[ShoppingItem]):
        self.store.set_json(STORAGE_KEYS["SHOPPING_LIST"], [item.to_dict() for item in items])

    def _notify(self, action: str, item: ShoppingItem):
        self._event_bus.publish(SHOPPING_CHANGED, {"action": action, "item": item.to_dict()})

    @staticmethod
    def _find(items: List[ShoppingItem], item_id: str) -> Optional[ShoppingItem]:
        for item in items:
            if item.id == item_id:
                return item
        return None

    # --- Queries -----------------------------------------------------------
    def all(self) -> List[ShoppingItem]:
        """Every item in storage order."""
        return self._load()

    def get(self, item_id: str) -> Optional[ShoppingItem]:
        return self._find(self._load(), item_id)

    def list(self, category: Optional[str] = None, search: Optional[str] = None) -> List[ShoppingItem]:
        """Items in display order, optionally narrowed by category and/or name substring."""
        items = self._load()
        if category and category != "all":
            items = [item for item in items if item.category == category]
        if search:
            needle = search.lower()
            items = [item for item in items if needle in item.name.lower()]
        return sort_for_display(items)

    # --- Mutations ---------------------------------------------------------
    def add(self, name: str, category: str, priority: bool = False) -> ShoppingItem:
        name = (name or "").strip()
        validate_item_fields(name, category)
        items = self._load()
        now = self.clock()
        existing = {item.id for item in items}
        item_id = generate_item_id(now)
        while item_id in existing:
            item_id = generate_item_id(now)
        item = ShoppingItem(item_id, name, category, priority, False, to_iso(now))
        items.append(item)
        self._save(items)
        logger.info("Shopping item added: %s", item)
        self._notify("added", item)
        return item

    def edit(self, item_id: str, name: str, category: str, priority: bool) -> Optional[ShoppingItem]:
        """Update name/category/priority; ``checked`` and ``addedDate`` are kept."""
        items = self._load()
        item = self._find(items, item_id)
        if item is None:
            return None
        name = (name or "").strip()
        validate_item_fields(name, category)
        item.name = name
        item.category = category
        item.priority = bool(priority)
        self._save(items)
        logger.info("Shopping item updated: %s", item)
        self._notify("updated", item)
        return item

    def toggle_checked(self, item_id: str) -> Optional[ShoppingItem]:
        items = self._load()
        item = self._find(items, item_id)
        if item is None:
            return None
        item.checked = not item.checked
        self._save(items)
        self._notify("toggled", item)
        return item

    def remove(self, item_id: str) -> bool:
        items = self._load()
        item = self._find(items, item_id)
        if item is None:
            return False
        items.remove(item)
        self._save(items)
        logger.info("Shopping item removed: %s", item)
        self._notify("removed", item)
        return True
