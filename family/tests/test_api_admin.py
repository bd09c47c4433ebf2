import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from fastapi.testclient import TestClient

from family.api.api_run import create_app


class TestAdminAPI(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.now = datetime(2026, 10, 18, 9, 0, 0)
        self.app = create_app(Path(self._tmp.name) / "store.json", clock=lambda: self.now,
                              admin_password="admin123")
        self.client = TestClient(self.app)
        resp = self.client.post('/api/admin/login', json={"password": "admin123"})
        self.assertEqual(resp.status_code, 200)

    def tearDown(self):
        self._tmp.cleanup()

    def test_add_edit_delete_item(self):
        resp = self.client.post('/api/admin/shopping-list',
                                json={"name": "Fresh Milk", "category": "groceries", "priority": False})
        self.assertEqual(resp.status_code, 201)
        item = resp.json()["item"]
        self.assertTrue(item["id"])
        self.assertFalse(item["checked"])

        listing = self.client.get('/api/admin/shopping-list').json()
        self.assertEqual(listing["count"], 6)
        self.assertEqual(len([i for i in listing["items"] if i["id"] == item["id"]]), 1)

        resp = self.client.put(f'/api/admin/shopping-list/{item["id"]}',
                               json={"name": "Goat Milk", "category": "groceries", "priority": True})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["item"]["name"], "Goat Milk")
        self.assertEqual(resp.json()["item"]["addedDate"], item["addedDate"])

        self.assertEqual(self.client.delete(f'/api/admin/shopping-list/{item["id"]}').status_code, 200)
        self.assertEqual(self.client.delete(f'/api/admin/shopping-list/{item["id"]}').status_code, 404)
        resp = self.client.put(f'/api/admin/shopping-list/{item["id"]}',
                               json={"name": "Goat Milk", "category": "groceries", "priority": True})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(self.client.get('/api/admin/shopping-list').json()["count"], 5)

    def test_invalid_category_rejected(self):
        resp = self.client.post('/api/admin/shopping-list', json={"name": "Lego", "category": "toys"})
        self.assertEqual(resp.status_code, 422)

    def test_search(self):
        data = self.client.get('/api/admin/shopping-list', params={"search": "paper"}).json()
        self.assertEqual([i["name"] for i in data["items"]], ["Toilet Paper"])

    def test_update_meal(self):
        resp = self.client.put('/api/admin/meals/lunch', json={"time": "13:00", "description": "Harira"})
        self.assertEqual(resp.status_code, 200)
        meals = self.client.get('/api/admin/meals').json()["meals"]
        self.assertEqual(meals["lunch"], {"time": "13:00", "description": "Harira"})
        self.assertEqual(meals["breakfast"]["time"], "08:00")

        resp = self.client.put('/api/admin/meals/dinner',
                               json={"time": "20:00", "description": "Tagine", "date": "2026-10-25"})
        self.assertEqual(resp.json()["date"], "2026-10-25")
        other = self.client.get('/api/admin/meals', params={"date": "2026-10-25"}).json()
        self.assertEqual(other["meals"]["dinner"]["description"], "Tagine")

        self.assertEqual(self.client.put('/api/admin/meals/brunch', json={"time": "10:00"}).status_code, 400)

    def test_stats_charts_and_users(self):
        self.client.post('/api/login', json={"first_name": "Omar", "last_name": "Krouma"})
        items = self.client.get('/api/admin/shopping-list').json()["items"]
        self.client.post(f'/api/shopping-list/{items[0]["id"]}/toggle')

        stats = self.client.get('/api/admin/stats').json()
        self.assertEqual(stats["total_users"], 1)
        self.assertEqual(stats["shopping_items"], 5)
        self.assertEqual(stats["completion_rate"], 20)

        charts = self.client.get('/api/admin/charts').json()
        self.assertEqual(charts["shopping"]["data"], [3, 2, 0, 0])
        self.assertEqual(charts["activity"]["data"][-1], 1)

        users = self.client.get('/api/admin/users').json()
        self.assertEqual(users["users"][0]["status"], "Active")
        self.assertEqual(users["users"][0]["last_login_text"], "Today")

    def test_export_and_import(self):
        exported = self.client.get('/api/admin/export')
        self.assertEqual(exported.status_code, 200)
        self.assertIn("attachment", exported.headers["content-disposition"])
        data = exported.json()
        self.assertEqual(len(data["shoppingList"]), 5)

        data["shoppingList"] = data["shoppingList"][:2]
        resp = self.client.post('/api/admin/import', json=data)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["counts"]["shoppingList"], 2)
        self.assertEqual(self.client.get('/api/admin/shopping-list').json()["count"], 2)


class TestMemberShoppingAPI(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.client = TestClient(create_app(Path(self._tmp.name) / "store.json",
                                            clock=lambda: datetime(2026, 10, 18, 9, 0, 0)))
        self.client.post('/api/login', json={"first_name": "Lina", "last_name": "Krouma"})

    def tearDown(self):
        self._tmp.cleanup()

    def test_filter_and_toggle(self):
        data = self.client.get('/api/shopping-list', params={"category": "household"}).json()
        self.assertEqual(data["count"], 2)
        # priority items come first
        self.assertEqual(data["items"][0]["name"], "Toilet Paper")
        self.assertEqual(self.client.get('/api/shopping-list', params={"category": "toys"}).status_code, 400)

        first = self.client.post('/api/shopping-list/item_1/toggle').json()
        self.assertTrue(first["item"]["checked"])
        second = self.client.post('/api/shopping-list/item_1/toggle').json()
        self.assertFalse(second["item"]["checked"])
        self.assertEqual(self.client.post('/api/shopping-list/nope/toggle').json()["status"], "not_found")

    def test_print_shopping_list(self):
        resp = self.client.get('/api/shopping-list/print')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_notifications_feed(self):
        cursor = self.client.get('/api/notifications').json()["next_cursor"]
        self.client.post('/api/shopping-list/item_2/toggle')
        events = self.client.get('/api/notifications', params={"since": cursor}).json()["events"]
        self.assertEqual([e["type"] for e in events], ["shopping.changed"])
        self.assertEqual(events[0]["message"], "Whole Wheat Bread noted")


if __name__ == '__main__':
    unittest.main()
