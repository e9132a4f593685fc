# app/routers/admin.py
"""
Back-office: gated admin screen + inventory form + delete.
Every mutating endpoint requires an admin session user.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.exceptions import NotFoundError, RemoteStoreError
from app.schemas.vehicle import VehicleForm
from app.services import backoffice_service
from app.services.auth_service import GATE_BACKOFFICE, GATE_LOGIN, admin_gate
from app.services.catalog_client import CatalogStoreClient, get_client
from app.services.catalog_state import CatalogState, get_state
from app.services.screen_service import admin_screen

router = APIRouter()


def require_admin(state: CatalogState = Depends(get_state)) -> CatalogState:
    gate = admin_gate(state)
    if gate == GATE_LOGIN:
        raise HTTPException(status_code=401, detail="Login required")
    if gate != GATE_BACKOFFICE:
        raise HTTPException(status_code=403, detail="Administrator privileges required")
    return state


@router.get("/admin", summary="Admin area (login, restricted or backoffice)")
def get_admin(state: CatalogState = Depends(get_state)):
    return admin_screen(state)


@router.post("/admin/vehicles/{vehicle_id}/edit", summary="Load a vehicle into the form")
def begin_edit(vehicle_id: int, state: CatalogState = Depends(require_admin)):
    try:
        draft = backoffice_service.begin_edit(state, vehicle_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return {"edit_target_id": vehicle_id, "form": draft.model_dump()}


@router.delete("/admin/edit", summary="Cancel editing")
def cancel_edit(state: CatalogState = Depends(require_admin)):
    backoffice_service.cancel_edit(state)
    return {"edit_target_id": None, "form": state.draft.model_dump()}


@router.post("/admin/vehicles", summary="Submit the inventory form (create or update)")
async def submit_vehicle(form: VehicleForm,
                         state: CatalogState = Depends(require_admin),
                         client: CatalogStoreClient = Depends(get_client)):
    try:
        notice = await backoffice_service.submit_form(state, client, form)
    except RemoteStoreError:
        raise HTTPException(status_code=502, detail=state.notices.pending.as_dict())
    return {"notice": notice.as_dict(), "inventory_size": len(state.vehicles)}


@router.delete("/admin/vehicles/{vehicle_id}", summary="Delete a vehicle (needs confirm=true)")
async def delete_vehicle(vehicle_id: int, confirm: bool = False,
                         state: CatalogState = Depends(require_admin),
                         client: CatalogStoreClient = Depends(get_client)):
    if state.get_vehicle(vehicle_id) is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    if not confirm:
        return {
            "status": "confirmation_required",
            "message": "Are you sure you want to delete this vehicle?",
            "vehicle_id": vehicle_id,
        }
    try:
        notice = await backoffice_service.delete_vehicle(state, client, vehicle_id)
    except RemoteStoreError:
        raise HTTPException(status_code=502, detail=state.notices.pending.as_dict())
    return {"status": "deleted", "notice": notice.as_dict()}
