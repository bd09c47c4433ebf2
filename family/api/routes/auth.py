"""Login / logout routes for family members and the admin."""

from fastapi import APIRouter, Depends

from family.api.state import DashboardState, get_state
from family.utilities.validators import LoginInput, AdminLoginInput

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login")
def login(payload: LoginInput, state: DashboardState = Depends(get_state)):
    session = state.sessions.login(payload.first_name, payload.last_name, remember=payload.remember)
    return {
        "status": "success",
        "message": f"Welcome back, {session.first_name}!",
        "user": session.to_dict(),
    }


@router.get("/login/remembered")
def remembered_user(state: DashboardState = Depends(get_state)):
    """Names saved with "remember me", used to prefill the login form."""
    remembered = state.sessions.remembered_user()
    return {"remembered": remembered is not None, "user": remembered}


@router.get("/session")
def session_status(state: DashboardState = Depends(get_state)):
    """Periodic inactivity check; does not count as activity."""
    session = state.sessions.check_session()
    if session is None:
        return {"active": False, "user": None, "remaining_ms": 0}
    return {
        "active": True,
        "user": session.to_dict(),
        "remaining_ms": state.sessions.remaining_ms(),
    }


@router.post("/activity")
def touch_activity(state: DashboardState = Depends(get_state)):
    """Pointer / key / scroll / touch activity reported by the page."""
    if state.sessions.check_session() is None:
        return {"active": False}
    return {"active": True, "last_activity": state.sessions.touch_activity()}


@router.post("/logout")
def logout(state: DashboardState = Depends(get_state)):
    state.sessions.logout()
    return {"status": "success", "message": "Logged out"}


@router.post("/admin/login")
def admin_login(payload: AdminLoginInput, state: DashboardState = Depends(get_state)):
    session = state.sessions.admin_login(payload.password)
    return {"status": "success", "message": "Admin access granted", "session": session.to_dict()}


@router.post("/admin/logout")
def admin_logout(state: DashboardState = Depends(get_state)):
    state.sessions.admin_logout()
    return {"status": "success", "message": "Logged out successfully"}
