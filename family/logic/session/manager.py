"""Session management for family members and the admin.

A single household shares one store, so there is one user session slot
(``current_user`` + ``last_activity``) and one admin session slot
(``admin_session``). Both expire once no activity was recorded for the
configured timeout. Nothing is cached: each call re-reads the store.
"""
from __future__ import annotations
import logging
from typing import Optional, Dict

from family.domain.Session import UserSession, AdminSession
from family.events.Event_Bus import GLOBAL_EVENT_BUS, USER_LOGIN, ADMIN_LOGIN, SESSION_EXPIRED
from family.infra.Key_Value_Store import KeyValueStore
from family.infra.User_Repository import UserDirectory
from family.utilities.config import ADMIN_PASSWORD, SESSION_TIMEOUT_MS
from family.utilities.constants import STORAGE_KEYS
from family.utilities.errors import AuthError, ValidationError
from family.utilities.timeutils import Clock, system_clock, to_iso, to_ms
from family.utilities.validators import validate_login_names

logger = logging.getLogger(__name__)

__all__ = ["SessionManager"]


class SessionManager:
    def __init__(self, store: KeyValueStore, users: Optional[UserDirectory] = None,
                 clock: Clock = system_clock, timeout_ms: int = SESSION_TIMEOUT_MS,
                 admin_password: str = ADMIN_PASSWORD, event_bus=None):
        self.store = store
        self.clock = clock
        self.users = users or UserDirectory(store, clock)
        self.timeout_ms = timeout_ms
        self._admin_password = admin_password
        self._event_bus = event_bus or GLOBAL_EVENT_BUS

    def _now_ms(self) -> int:
        return to_ms(self.clock())

    def _expired(self, last_activity_ms: int) -> bool:
        return self._now_ms() - last_activity_ms > self.timeout_ms

    # --- Family member session ---------------------------------------------
    def login(self, first_name: str, last_name: str, remember: bool = False) -> UserSession:
        """Validate names, record the login and open the user session.

        Raises ValidationError with per-field messages for malformed names.
        """
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        validate_login_names(first_name, last_name)

        user = self.users.upsert(first_name, last_name)
        session = UserSession.for_user(user)
        self.store.set_json(STORAGE_KEYS["CURRENT_USER"], session.to_dict())
        self.touch_activity()

        if remember:
            self.store.set_json(STORAGE_KEYS["REMEMBER_ME"], {
                "firstName": session.first_name,
                "lastName": session.last_name,
            })
        else:
            self.store.remove_item(STORAGE_KEYS["REMEMBER_ME"])

        self._event_bus.publish(USER_LOGIN, {
            "firstName": session.first_name,
            "lastName": session.last_name,
            "loginCount": session.login_count,
        })
        return session

    def touch_activity(self) -> int:
        now = self._now_ms()
        self.store.set_json(STORAGE_KEYS["LAST_ACTIVITY"], now)
        return now

    def last_activity(self) -> Optional[int]:
        value = self.store.get_json(STORAGE_KEYS["LAST_ACTIVITY"], None)
        try:
            return int(value) if value is not None else None
        except (TypeError, ValueError):
            logger.error("Stored last_activity is not a timestamp: %r", value)
            return None

    def is_session_valid(self) -> bool:
        last = self.last_activity()
        return last is not None and not self._expired(last)

    def current_user(self) -> Optional[UserSession]:
        data = self.store.get_json(STORAGE_KEYS["CURRENT_USER"], None)
        if not isinstance(data, dict):
            return None
        return UserSession.from_dict(data)

    def check_session(self) -> Optional[UserSession]:
        """Return the active user session, logging out first if it has expired."""
        session = self.current_user()
        if session is None:
            return None
        if not self.is_session_valid():
            logger.warning("Session for %s %s expired", session.first_name, session.last_name)
            self.logout()
            self._event_bus.publish(SESSION_EXPIRED, {
                "firstName": session.first_name,
                "lastName": session.last_name,
            })
            return None
        return session

    def remaining_ms(self) -> int:
        last = self.last_activity()
        if last is None:
            return 0
        return max(0, self.timeout_ms - (self._now_ms() - last))

    def remembered_user(self) -> Optional[Dict[str, str]]:
        data = self.store.get_json(STORAGE_KEYS["REMEMBER_ME"], None)
        if not isinstance(data, dict) or "firstName" not in data or "lastName" not in data:
            return None
        return {"firstName": data["firstName"], "lastName": data["lastName"]}

    def logout(self):
        self.store.remove_item(STORAGE_KEYS["CURRENT_USER"])
        self.store.remove_item(STORAGE_KEYS["LAST_ACTIVITY"])

    # --- Admin session -----------------------------------------------------
    def admin_login(self, password: str) -> AdminSession:
        if not password:
            raise ValidationError({"password": "Password is required"})
        if password != self._admin_password:
            logger.warning("Rejected admin login attempt")
            raise AuthError("Incorrect password")
        now = self.clock()
        session = AdminSession(login_time=to_iso(now), last_activity=to_ms(now))
        self.store.set_json(STORAGE_KEYS["ADMIN_SESSION"], session.to_dict())
        logger.info("Admin session opened")
        self._event_bus.publish(ADMIN_LOGIN, {"loginTime": session.login_time})
        return session

    def admin_session(self) -> Optional[AdminSession]:
        data = self.store.get_json(STORAGE_KEYS["ADMIN_SESSION"], None)
        if not isinstance(data, dict):
            return None
        return AdminSession.from_dict(data)

    def is_admin_session_valid(self) -> bool:
        session = self.admin_session()
        return session is not None and session.is_admin and not self._expired(session.last_activity)

    def touch_admin_activity(self) -> Optional[AdminSession]:
        session = self.admin_session()
        if session is None:
            return None
        session.last_activity = self._now_ms()
        self.store.set_json(STORAGE_KEYS["ADMIN_SESSION"], session.to_dict())
        return session

    def admin_logout(self):
        self.store.remove_item(STORAGE_KEYS["ADMIN_SESSION"])
