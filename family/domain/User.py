"""User domain entity: a family member identified by first and last name."""
from typing import Optional


class User:
    def __init__(self, first_name: str = "", last_name: str = "",
                 last_login: Optional[str] = None, login_count: int = 0):
        self.first_name = first_name
        self.last_name = last_name
        self.last_login = last_login
        self.login_count = login_count

    @staticmethod
    def identity(first_name: str, last_name: str):
        '''Case-insensitive identity key.'''
        return ((first_name or "").lower(), (last_name or "").lower())

    def matches(self, first_name: str, last_name: str) -> bool:
        return User.identity(self.first_name, self.last_name) == User.identity(first_name, last_name)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    def __str__(self) -> str:
        return f"{self.full_name} - logins: {self.login_count} - last: {self.last_login or '-'}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a User from its stored camelCase record. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        try:
            count = int(d.get("loginCount") or 0)
        except (TypeError, ValueError):
            count = 0
        return User(
            first_name=str(d.get("firstName", "")),
            last_name=str(d.get("lastName", "")),
            last_login=d.get("lastLogin"),
            login_count=count,
        )

    def to_dict(self):
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "lastLogin": self.last_login,
            "loginCount": self.login_count,
        }
