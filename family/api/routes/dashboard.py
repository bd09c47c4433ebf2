"""Family member routes: today's meals, the shopping list and the theme."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from family.api.state import DashboardState, get_state, require_user
from family.domain.Session import UserSession
from family.infra.Meal_Repository import date_key
from family.infra.pdf_utils import generate_pdf_for_shopping_list
from family.utilities.constants import CATEGORIES
from family.utilities.validators import ThemeInput

router = APIRouter(prefix="/api", tags=["dashboard"])


def _plan_payload(plan):
    return {
        name: {**meal.to_dict(), "display_time": meal.display_time}
        for name, meal in plan.meals.items()
    }


@router.get("/dashboard")
def dashboard(user: UserSession = Depends(require_user), state: DashboardState = Depends(get_state)):
    now = state.clock()
    plan = state.meals.get_plan_for_date(now.date())
    return {
        "user": user.to_dict(),
        "initials": user.initials,
        "welcome_name": user.first_name,
        "date": f"{now:%A, %B} {now.day}, {now:%Y}",
        "time": now.strftime("%I:%M %p"),
        "date_key": date_key(now.date()),
        "meals": _plan_payload(plan),
        "theme": state.preferences.get_theme(),
    }


@router.get("/meals/today")
def meals_today(user: UserSession = Depends(require_user), state: DashboardState = Depends(get_state)):
    today = state.clock().date()
    return {"date": date_key(today), "meals": _plan_payload(state.meals.get_plan_for_date(today))}


@router.get("/shopping-list")
def shopping_list(category: Optional[str] = Query(default=None),
                  user: UserSession = Depends(require_user),
                  state: DashboardState = Depends(get_state)):
    if category and category != "all" and category not in CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unknown category '{category}'")
    items = state.shopping.list(category=category)
    return {
        "filter": category or "all",
        "count": len(items),
        "items": [item.to_dict() for item in items],
    }


@router.post("/shopping-list/{item_id}/toggle")
def toggle_item(item_id: str, user: UserSession = Depends(require_user),
                state: DashboardState = Depends(get_state)):
    item = state.shopping.toggle_checked(item_id)
    if item is None:
        return {"status": "not_found", "item": None}
    return {"status": "success", "item": item.to_dict()}


@router.get("/shopping-list/print")
def print_shopping_list(category: Optional[str] = Query(default=None),
                        user: UserSession = Depends(require_user),
                        state: DashboardState = Depends(get_state)):
    items = state.shopping.list(category=category)
    pdf_bytes = generate_pdf_for_shopping_list(items)
    filename = f"shopping_list_{date_key(state.clock().date())}.pdf"
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f"attachment; filename={filename}"})


@router.get("/theme")
def get_theme(state: DashboardState = Depends(get_state)):
    return {"theme": state.preferences.get_theme()}


@router.post("/theme")
def set_theme(payload: ThemeInput, state: DashboardState = Depends(get_state)):
    return {"theme": state.preferences.set_theme(payload.theme)}


@router.post("/theme/toggle")
def toggle_theme(state: DashboardState = Depends(get_state)):
    return {"theme": state.preferences.toggle_theme()}
