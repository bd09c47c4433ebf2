"""Web-facing observers for dashboard events.

Subscribes to every dashboard event on the GLOBAL_EVENT_BUS and keeps a
lightweight in-memory ring buffer the web layer serves to the page, which
turns them into toast notifications without a full reload.

Each event gets an auto-increment integer id (cursor) so clients can request
only newer events (since=<last_id_seen>). The buffer is per-process and capped
at MAX_EVENTS.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, USER_LOGIN, ADMIN_LOGIN, SESSION_EXPIRED, SHOPPING_CHANGED, MEALS_UPDATED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 200
_started = False

_WATCHED = (USER_LOGIN, ADMIN_LOGIN, SESSION_EXPIRED, SHOPPING_CHANGED, MEALS_UPDATED)


def _message(event_name: str, payload: Dict[str, Any]) -> str:
    if event_name == USER_LOGIN:
        return f"Welcome back, {payload.get('firstName', '')}!"
    if event_name == ADMIN_LOGIN:
        return "Admin access granted"
    if event_name == SESSION_EXPIRED:
        return "Session expired. Please log in again."
    if event_name == MEALS_UPDATED:
        return f"{str(payload.get('meal', '')).capitalize()} updated successfully!"
    if event_name == SHOPPING_CHANGED:
        name = (payload.get('item') or {}).get('name', '')
        action = payload.get('action', 'updated')
        if action == 'toggled':
            checked = (payload.get('item') or {}).get('checked')
            return f"{name} noted" if checked else f"{name} unchecked"
        return f"Item {action} successfully" if not name else f"{name} {action}"
    return event_name


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    data = payload if isinstance(payload, dict) else {}
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            'message': _message(event_name, data),
            'level': 'warning' if event_name == SESSION_EXPIRED else 'success',
        }
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _WATCHED:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the whole buffer. Response includes next_cursor
    (largest id) so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
