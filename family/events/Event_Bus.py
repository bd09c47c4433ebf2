"""Simple Event Bus / Observer implementation for dashboard notifications.

Event names:
  user.login        -> payload {"firstName": str, "lastName": str, "loginCount": int}
  admin.login       -> payload {"loginTime": str}
  session.expired   -> payload {"firstName": str, "lastName": str}
  shopping.changed  -> payload {"action": "added|updated|toggled|removed", "item": dict}
  meals.updated     -> payload {"date": "YYYY-MM-DD", "meal": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
USER_LOGIN = "user.login"
ADMIN_LOGIN = "admin.login"
SESSION_EXPIRED = "session.expired"
SHOPPING_CHANGED = "shopping.changed"
MEALS_UPDATED = "meals.updated"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()

__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'USER_LOGIN', 'ADMIN_LOGIN', 'SESSION_EXPIRED', 'SHOPPING_CHANGED', 'MEALS_UPDATED'
]
