# app/services/backoffice_service.py
"""
Inventory management: one form for create and edit, plus delete.

Each operation makes one remote call and, only on success, patches the local
collection. A failed call leaves the collection, the draft and the edit
target exactly as they were. No retry, no rollback.
"""

from app.exceptions import NotFoundError, RemoteStoreError
from app.schemas.vehicle import VehicleForm
from app.services.catalog_state import CatalogState
from app.services.notice_service import Notice
from app.utils.logger import get_logger

logger = get_logger(__name__)


def begin_edit(state: CatalogState, vehicle_id: int) -> VehicleForm:
    vehicle = state.get_vehicle(vehicle_id)
    if vehicle is None:
        raise NotFoundError(f"Vehicle {vehicle_id} not found")
    draft = VehicleForm.from_vehicle(vehicle)
    state.set_edit_target(vehicle_id, draft)
    return draft


def cancel_edit(state: CatalogState):
    state.reset_draft()


async def submit_form(state: CatalogState, client, form: VehicleForm) -> Notice:
    """Create when no edit target is set, otherwise update the target."""
    edit_id = state.edit_target_id
    try:
        if edit_id is not None:
            await client.update_vehicle(edit_id, form)
            if state.apply_updated(edit_id, form) is None:
                logger.warning(f"Vehicle {edit_id} updated remotely but missing locally")
            notice = state.notices.success("Updated.", "inventory.updated")
            logger.info(f"✏️  Vehicle {edit_id} updated: {form.model} ({form.year})")
        else:
            created = await client.create_vehicle(form)
            state.apply_created(created)
            notice = state.notices.success("Created.", "inventory.created")
            logger.info(f"➕ Vehicle {created.id} created: {created.model} ({created.year})")
    except RemoteStoreError:
        state.notices.error("Error while saving.", "inventory.save_failed")
        raise

    state.reset_draft()
    return notice


async def delete_vehicle(state: CatalogState, client, vehicle_id: int) -> Notice:
    """Callers must have collected an explicit confirmation first."""
    try:
        await client.delete_vehicle(vehicle_id)
    except RemoteStoreError:
        state.notices.error("Error while deleting.", "inventory.delete_failed")
        raise

    state.apply_removed(vehicle_id)
    if state.edit_target_id == vehicle_id:
        state.reset_draft()
    logger.info(f"🗑️  Vehicle {vehicle_id} deleted")
    return state.notices.success("Deleted.", "inventory.deleted")
