"""Session records for the logged-in family member and the admin."""
from typing import Optional

from family.domain.User import User


class UserSession:
    def __init__(self, first_name: str, last_name: str, last_login: Optional[str] = None,
                 login_count: Optional[int] = None):
        self.first_name = first_name
        self.last_name = last_name
        self.last_login = last_login
        self.login_count = login_count

    @staticmethod
    def for_user(user: User) -> "UserSession":
        return UserSession(user.first_name, user.last_name, user.last_login, user.login_count)

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return UserSession(
            first_name=str(d.get("firstName", "")),
            last_name=str(d.get("lastName", "")),
            last_login=d.get("lastLogin"),
            login_count=d.get("loginCount"),
        )

    def to_dict(self):
        data = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "lastLogin": self.last_login,
        }
        if self.login_count is not None:
            data["loginCount"] = self.login_count
        return data

    def __str__(self) -> str:
        return f"UserSession({self.first_name} {self.last_name})"

    __repr__ = __str__


class AdminSession:
    def __init__(self, login_time: str, last_activity: int, is_admin: bool = True):
        self.is_admin = is_admin
        self.login_time = login_time
        self.last_activity = last_activity

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        try:
            last_activity = int(d.get("lastActivity") or 0)
        except (TypeError, ValueError):
            last_activity = 0
        return AdminSession(
            login_time=str(d.get("loginTime", "")),
            last_activity=last_activity,
            is_admin=d.get("isAdmin") is True,
        )

    def to_dict(self):
        return {
            "isAdmin": self.is_admin,
            "loginTime": self.login_time,
            "lastActivity": self.last_activity,
        }

    def __str__(self) -> str:
        return f"AdminSession(since {self.login_time})"

    __repr__ = __str__
