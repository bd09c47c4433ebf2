"""Application state owned by one running dashboard, plus request guards.

DashboardState bundles the store and every component built on it. It lives on
``app.state.dashboard``; routes reach it through ``get_state``.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

from fastapi import Depends, HTTPException, Request, status

from family.domain.Session import UserSession, AdminSession
from family.infra.Key_Value_Store import KeyValueStore
from family.infra.Meal_Repository import MealPlanner
from family.infra.Preference_Repository import PreferenceRepository
from family.infra.Shopping_Repository import ShoppingListStore
from family.infra.User_Repository import UserDirectory
from family.logic.session.manager import SessionManager
from family.utilities.config import ADMIN_PASSWORD, SESSION_TIMEOUT_MS
from family.utilities.timeutils import Clock, system_clock

logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    store: KeyValueStore
    clock: Clock = system_clock
    admin_password: str = ADMIN_PASSWORD
    timeout_ms: int = SESSION_TIMEOUT_MS
    users: UserDirectory = field(init=False)
    sessions: SessionManager = field(init=False)
    meals: MealPlanner = field(init=False)
    shopping: ShoppingListStore = field(init=False)
    preferences: PreferenceRepository = field(init=False)

    def __post_init__(self):
        self.users = UserDirectory(self.store, self.clock)
        self.sessions = SessionManager(self.store, self.users, self.clock,
                                       timeout_ms=self.timeout_ms, admin_password=self.admin_password)
        self.meals = MealPlanner(self.store, self.clock)
        self.shopping = ShoppingListStore(self.store, self.clock)
        self.preferences = PreferenceRepository(self.store)


def get_state(request: Request) -> DashboardState:
    return request.app.state.dashboard


def require_user(state: DashboardState = Depends(get_state)) -> UserSession:
    """Current family member; an expired session is logged out and rejected.

    Every authenticated request counts as activity and refreshes the timer.
    """
    had_session = state.sessions.current_user() is not None
    session = state.sessions.check_session()
    if session is None:
        detail = "Session expired. Please log in again." if had_session else "Not logged in"
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
    state.sessions.touch_activity()
    return session


def require_admin(state: DashboardState = Depends(get_state)) -> AdminSession:
    sessions = state.sessions
    if not sessions.is_admin_session_valid():
        if sessions.admin_session() is not None:
            logger.warning("Admin session expired")
            sessions.admin_logout()
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin session expired")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin access required")
    return sessions.touch_admin_activity()
