import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path

from family.infra.Key_Value_Store import KeyValueStore
from family.logic.session.manager import SessionManager
from family.utilities.errors import AuthError, ValidationError


class TestSessionManager(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = KeyValueStore(Path(self._tmp.name) / "store.json")
        self.now = datetime(2026, 10, 18, 9, 0, 0)
        self.sessions = SessionManager(self.store, clock=lambda: self.now,
                                       timeout_ms=30 * 60 * 1000, admin_password="admin123")

    def tearDown(self):
        self._tmp.cleanup()

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)

    def test_login_creates_user_and_session(self):
        session = self.sessions.login("Amina", "Krouma")
        self.assertEqual(session.first_name, "Amina")
        self.assertEqual(session.login_count, 1)
        self.assertEqual(self.store.get_json("current_user")["firstName"], "Amina")
        self.assertIsNotNone(self.store.get_json("last_activity"))
        self.assertTrue(self.sessions.is_session_valid())
        users = self.sessions.users.list()
        self.assertEqual(len(users), 1)

    def test_login_twice_increments_count_and_updates_last_login(self):
        first = self.sessions.login("Amina", "Krouma")
        self.advance(hours=2)
        second = self.sessions.login("amina", "KROUMA")
        self.assertEqual(second.login_count, first.login_count + 1)
        self.assertNotEqual(second.last_login, first.last_login)
        self.assertTrue(second.last_login.startswith("2026-10-18T11:00"))
        self.assertEqual(len(self.sessions.users.list()), 1)

    def test_invalid_names_report_each_field(self):
        with self.assertRaises(ValidationError) as ctx:
            self.sessions.login("", "K9")
        self.assertEqual(ctx.exception.errors["firstName"], "First name is required")
        self.assertEqual(ctx.exception.errors["lastName"], "Please enter a valid last name")
        self.assertIsNone(self.store.get_item("current_user"))

    def test_name_shape_rule(self):
        self.sessions.login("Mary-Jane", "Van Dyke")
        for bad in ("A", "x" * 31, "Zoë", "O'Neil"):
            with self.assertRaises(ValidationError):
                self.sessions.login(bad, "Krouma")

    def test_session_expires_after_timeout(self):
        self.sessions.login("Amina", "Krouma")
        self.advance(minutes=30)
        self.assertTrue(self.sessions.is_session_valid())
        self.advance(minutes=1)
        self.assertFalse(self.sessions.is_session_valid())
        self.assertIsNone(self.sessions.check_session())
        # expired session was logged out
        self.assertIsNone(self.store.get_item("current_user"))
        self.assertIsNone(self.store.get_item("last_activity"))

    def test_touch_activity_extends_session(self):
        self.sessions.login("Amina", "Krouma")
        self.advance(minutes=25)
        self.sessions.touch_activity()
        self.advance(minutes=25)
        self.assertIsNotNone(self.sessions.check_session())
        self.assertEqual(self.sessions.remaining_ms(), 5 * 60 * 1000)

    def test_no_activity_timestamp_means_invalid(self):
        self.assertFalse(self.sessions.is_session_valid())
        self.assertIsNone(self.sessions.check_session())

    def test_logout_clears_session_keys(self):
        self.sessions.login("Amina", "Krouma")
        self.sessions.logout()
        self.assertIsNone(self.sessions.current_user())
        self.assertIsNone(self.store.get_item("last_activity"))
        # the member stays in the directory
        self.assertEqual(len(self.sessions.users.list()), 1)

    def test_remember_me(self):
        self.sessions.login("Amina", "Krouma", remember=True)
        self.assertEqual(self.sessions.remembered_user(), {"firstName": "Amina", "lastName": "Krouma"})
        self.sessions.login("Amina", "Krouma", remember=False)
        self.assertIsNone(self.sessions.remembered_user())

    def test_admin_login(self):
        with self.assertRaises(AuthError):
            self.sessions.admin_login("wrong")
        with self.assertRaises(ValidationError):
            self.sessions.admin_login("")
        self.assertFalse(self.sessions.is_admin_session_valid())
        session = self.sessions.admin_login("admin123")
        self.assertTrue(session.is_admin)
        self.assertTrue(self.sessions.is_admin_session_valid())

    def test_admin_session_expiry_and_touch(self):
        self.sessions.admin_login("admin123")
        self.advance(minutes=20)
        self.sessions.touch_admin_activity()
        self.advance(minutes=20)
        self.assertTrue(self.sessions.is_admin_session_valid())
        self.advance(minutes=11)
        self.assertFalse(self.sessions.is_admin_session_valid())
        self.sessions.admin_logout()
        self.assertIsNone(self.sessions.admin_session())


if __name__ == '__main__':
    unittest.main()
