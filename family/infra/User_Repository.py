"""User directory: family members keyed by case-insensitive (first, last) name."""
import logging
from datetime import datetime
from typing import Dict, List

from family.domain.User import User
from family.infra.Key_Value_Store import KeyValueStore
from family.utilities.config import ACTIVE_WINDOW_DAYS
from family.utilities.constants import STORAGE_KEYS
from family.utilities.timeutils import Clock, system_clock, to_iso, parse_iso

logger = logging.getLogger(__name__)


class UserDirectory:
    def __init__(self, store: KeyValueStore, clock: Clock = system_clock):
        self.store = store
        self.clock = clock

    def _load(self) -> List[User]:
        data = self.store.get_json(STORAGE_KEYS["USERS"], [])
        if not isinstance(data, list):
            logger.error("Stored users is not a list, ignoring it")
            return []
        return [User.from_dict(entry) for entry in data if isinstance(entry, dict)]

    def _save(self, users: List[User]):
        self.store.set_json(STORAGE_KEYS["USERS"], [u.to_dict() for u in users])

    def upsert(self, first_name: str, last_name: str) -> User:
        """Record a login: bump an existing member or append a new one."""
        users = self._load()
        now = to_iso(self.clock())
        for user in users:
            if user.matches(first_name, last_name):
                user.last_login = now
                user.login_count += 1
                self._save(users)
                logger.info("User %s logged in (count=%s)", user.full_name, user.login_count)
                return user
        user = User(first_name, last_name, last_login=now, login_count=1)
        users.append(user)
        self._save(users)
        logger.info("New family member %s", user.full_name)
        return user

    def list(self) -> List[User]:
        return self._load()

    @staticmethod
    def activity(user: User, now: datetime, window_days: int = ACTIVE_WINDOW_DAYS) -> Dict[str, object]:
        """Describe how recently a member logged in, in calendar days."""
        last = parse_iso(user.last_login, like=now)
        if last is None:
            return {"days": None, "last_login_text": "Never", "is_active": False}
        diff_days = abs((now.date() - last.date()).days)
        if diff_days == 0:
            text = "Today"
        elif diff_days == 1:
            text = "Yesterday"
        else:
            text = f"{diff_days} days ago"
        return {"days": diff_days, "last_login_text": text, "is_active": diff_days <= window_days}
