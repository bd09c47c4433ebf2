import json
from datetime import datetime

from family.infra.Key_Value_Store import KeyValueStore
from family.infra.Shopping_Repository import ShoppingListStore
from family.infra.User_Repository import UserDirectory
from family.utilities.export_import import DataExporter, DataImporter


def _clock():
    return datetime(2026, 10, 18, 10, 0)


def test_export_contains_every_collection(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    UserDirectory(store, _clock).upsert("Omar", "Krouma")
    ShoppingListStore(store, _clock).all()

    data = DataExporter(store, _clock).export_data()
    assert set(data) == {"users", "meals", "shoppingList", "exportDate"}
    assert data["users"][0]["firstName"] == "Omar"
    assert len(data["shoppingList"]) == 5
    assert data["exportDate"].startswith("2026-10-18T10:00")


def test_export_to_file_and_replace_import(tmp_path):
    source = KeyValueStore(tmp_path / "source.json")
    UserDirectory(source, _clock).upsert("Omar", "Krouma")
    ShoppingListStore(source, _clock).add("Dates", "groceries", True)
    out = DataExporter(source, _clock).export_to_file(tmp_path / "exports" / "family.json")
    assert json.loads(out.read_text(encoding="utf-8"))["users"][0]["lastName"] == "Krouma"

    target = KeyValueStore(tmp_path / "target.json")
    counts = DataImporter(target).import_file(out)
    assert counts == {"users": 1, "meals": 0, "shoppingList": 6}
    names = [i.name for i in ShoppingListStore(target, _clock).all()]
    assert "Dates" in names


def test_merge_import_keeps_existing_records(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    users = UserDirectory(store, _clock)
    users.upsert("Omar", "Krouma")
    users.upsert("Omar", "Krouma")
    payload = {
        "users": [
            {"firstName": "omar", "lastName": "krouma", "lastLogin": None, "loginCount": 1},
            {"firstName": "Lina", "lastName": "Krouma", "lastLogin": None, "loginCount": 1},
        ],
        "shoppingList": [
            {"id": "x1", "name": "Tea", "category": "groceries"},
            {"id": "x1", "name": "Duplicate", "category": "groceries"},
        ],
        "meals": {"2026-10-18": {"breakfast": {"time": "09:00", "description": "Msemen"}}},
    }
    counts = DataImporter(store).import_data(payload, merge=True)
    assert counts["users"] == 2
    assert counts["shoppingList"] == 1
    stored = users.list()
    assert stored[0].login_count == 2
    assert [u.first_name for u in stored] == ["Omar", "Lina"]
