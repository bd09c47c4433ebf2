"""Admin routes: dashboard statistics, meal editing, shopping list management, members, export."""
import logging
from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from family.api.state import DashboardState, get_state, require_admin
from family.domain.Session import AdminSession
from family.infra.Meal_Repository import date_key
from family.logic.reporting.dashboard import (
    compute_dashboard_stats,
    category_breakdown,
    weekly_login_activity,
    member_rows,
)
from family.utilities.export_import import DataExporter, DataImporter
from family.utilities.validators import MealUpdateInput, ShoppingItemInput, ImportInput

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)


def _not_found(item_id: str):
    return JSONResponse(status_code=404, content={"status": "not_found", "id": item_id})


# -------------------- Dashboard --------------------
@router.get("/stats")
def admin_stats(admin: AdminSession = Depends(require_admin), state: DashboardState = Depends(get_state)):
    return compute_dashboard_stats(state.users.list(), state.shopping.all())


@router.get("/charts")
def admin_charts(admin: AdminSession = Depends(require_admin), state: DashboardState = Depends(get_state)):
    return {
        "shopping": category_breakdown(state.shopping.all()),
        "activity": weekly_login_activity(state.users.list(), state.clock().date()),
    }


@router.get("/users")
def admin_users(admin: AdminSession = Depends(require_admin), state: DashboardState = Depends(get_state)):
    rows = member_rows(state.users.list(), state.clock())
    return {"count": len(rows), "users": rows}


# -------------------- Meals --------------------
@router.get("/meals")
def admin_meals(date: Optional[_date] = Query(default=None),
                admin: AdminSession = Depends(require_admin),
                state: DashboardState = Depends(get_state)):
    day = date or state.clock().date()
    plan = state.meals.get_plan_for_date(day)
    return {"date": date_key(day), "meals": plan.to_dict()}


@router.put("/meals/{meal_name}")
def admin_update_meal(meal_name: str, payload: MealUpdateInput,
                      admin: AdminSession = Depends(require_admin),
                      state: DashboardState = Depends(get_state)):
    day = payload.date or state.clock().date()
    plan = state.meals.set_meal(day, meal_name, payload.time, payload.description)
    return {
        "status": "success",
        "message": f"{meal_name.capitalize()} updated successfully!",
        "date": date_key(day),
        "meals": plan.to_dict(),
    }


# -------------------- Shopping list --------------------
@router.get("/shopping-list")
def admin_shopping_list(search: str = Query(default=""),
                        admin: AdminSession = Depends(require_admin),
                        state: DashboardState = Depends(get_state)):
    items = state.shopping.list(search=search or None)
    return {"search": search, "count": len(items), "items": [item.to_dict() for item in items]}


@router.post("/shopping-list", status_code=201)
def admin_add_item(payload: ShoppingItemInput,
                   admin: AdminSession = Depends(require_admin),
                   state: DashboardState = Depends(get_state)):
    item = state.shopping.add(payload.name, payload.category, payload.priority)
    return {"status": "success", "message": "Item added successfully", "item": item.to_dict()}


@router.put("/shopping-list/{item_id}")
def admin_edit_item(item_id: str, payload: ShoppingItemInput,
                    admin: AdminSession = Depends(require_admin),
                    state: DashboardState = Depends(get_state)):
    item = state.shopping.edit(item_id, payload.name, payload.category, payload.priority)
    if item is None:
        return _not_found(item_id)
    return {"status": "success", "message": "Item updated successfully", "item": item.to_dict()}


@router.delete("/shopping-list/{item_id}")
def admin_delete_item(item_id: str,
                      admin: AdminSession = Depends(require_admin),
                      state: DashboardState = Depends(get_state)):
    if not state.shopping.remove(item_id):
        return _not_found(item_id)
    return {"status": "success", "message": "Item deleted successfully", "id": item_id}


# -------------------- Export / import --------------------
@router.get("/export")
def admin_export(admin: AdminSession = Depends(require_admin), state: DashboardState = Depends(get_state)):
    exporter = DataExporter(state.store, state.clock)
    return JSONResponse(
        content=exporter.export_data(),
        headers={"Content-Disposition": f"attachment; filename={exporter.default_filename()}"},
    )


@router.post("/import")
def admin_import(payload: ImportInput,
                 admin: AdminSession = Depends(require_admin),
                 state: DashboardState = Depends(get_state)):
    counts = DataImporter(state.store).import_data(payload.model_dump(), merge=payload.merge)
    logger.info("Imported data (merge=%s): %s", payload.merge, counts)
    return {"status": "success", "counts": counts}
