"""
Export and Import of the household data (members, meals, shopping list).
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from family.domain.ShoppingItem import ShoppingItem
from family.domain.User import User
from family.infra.Key_Value_Store import KeyValueStore
from family.utilities.constants import STORAGE_KEYS
from family.utilities.timeutils import Clock, system_clock, to_iso, to_ms

logger = logging.getLogger(__name__)


class DataExporter:
    """Export dashboard data as one JSON document."""

    def __init__(self, store: KeyValueStore, clock: Clock = system_clock):
        self.store = store
        self.clock = clock

    def export_data(self) -> Dict[str, Any]:
        data = {
            "users": self.store.get_json(STORAGE_KEYS["USERS"], []),
            "meals": self.store.get_json(STORAGE_KEYS["MEALS"], {}),
            "shoppingList": self.store.get_json(STORAGE_KEYS["SHOPPING_LIST"], []),
            "exportDate": to_iso(self.clock()),
        }
        logger.info("Exported %d users, %d meal days, %d shopping items",
                    len(data["users"]), len(data["meals"]), len(data["shoppingList"]))
        return data

    def default_filename(self) -> str:
        return f"family-data-{to_ms(self.clock())}.json"

    def export_to_file(self, output_path: Optional[Path] = None) -> Path:
        """Write the export document to ``output_path`` (timestamped name by default)."""
        if output_path is None:
            output_path = Path(self.default_filename())
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.export_data(), f, indent=2, ensure_ascii=False)
        logger.info(f"Exported all data to {output_path}")
        return output_path


class DataImporter:
    """Restore dashboard data from an export document."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def import_data(self, payload: Dict[str, Any], merge: bool = False) -> Dict[str, int]:
        """
        Import users, meals and shopping items.

        Args:
            payload: document produced by DataExporter.export_data
            merge: If True, keep existing records and add unseen ones
                   (members by name, items by id, meal days by date);
                   if False, replace each collection present in the payload.
        Returns:
            counts of records now stored per collection
        """
        users = [User.from_dict(u) for u in payload.get("users") or [] if isinstance(u, dict)]
        items = [ShoppingItem.from_dict(i) for i in payload.get("shoppingList") or [] if isinstance(i, dict)]
        meals = {k: v for k, v in (payload.get("meals") or {}).items() if isinstance(v, dict)}

        # ids must stay unique, first occurrence wins
        unique_items, seen_ids = [], set()
        for item in items:
            if item.id and item.id not in seen_ids:
                seen_ids.add(item.id)
                unique_items.append(item)
        items = unique_items

        if merge:
            existing_users = [User.from_dict(u) for u in self.store.get_json(STORAGE_KEYS["USERS"], [])
                              if isinstance(u, dict)]
            known = {User.identity(u.first_name, u.last_name) for u in existing_users}
            users = existing_users + [u for u in users if User.identity(u.first_name, u.last_name) not in known]

            existing_items = [ShoppingItem.from_dict(i) for i in self.store.get_json(STORAGE_KEYS["SHOPPING_LIST"], [])
                              if isinstance(i, dict)]
            known_ids = {i.id for i in existing_items}
            items = existing_items + [i for i in items if i.id not in known_ids]

            existing_meals = self.store.get_json(STORAGE_KEYS["MEALS"], {})
            if isinstance(existing_meals, dict):
                meals = {**meals, **existing_meals}
            logger.info("Merged imported data with existing data")
        else:
            logger.info("Importing data (replace mode)")

        self.store.set_json(STORAGE_KEYS["USERS"], [u.to_dict() for u in users])
        self.store.set_json(STORAGE_KEYS["SHOPPING_LIST"], [i.to_dict() for i in items])
        self.store.set_json(STORAGE_KEYS["MEALS"], meals)
        return {"users": len(users), "meals": len(meals), "shoppingList": len(items)}

    def import_file(self, input_path: Path, merge: bool = False) -> Dict[str, int]:
        with open(input_path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
        return self.import_data(payload, merge=merge)


# CLI interface
if __name__ == "__main__":
    import argparse
    from family.infra.paths import STORE_FILE, EXPORTS_DIR

    parser = argparse.ArgumentParser(description='Export/Import Family Dashboard data')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--file', help='Input/output file path')
    parser.add_argument('--merge', action='store_true', help='Merge with existing data on import')

    args = parser.parse_args()
    store = KeyValueStore(STORE_FILE)

    if args.action == 'export':
        exporter = DataExporter(store)
        target = Path(args.file) if args.file else EXPORTS_DIR / exporter.default_filename()
        print(f"✓ Exported to: {exporter.export_to_file(target)}")
    else:
        if not args.file:
            parser.error("--file is required for import")
        counts = DataImporter(store).import_file(Path(args.file), merge=args.merge)
        print(f"✓ Imported from {args.file}: {counts}")
