# app/services/cart_service.py
"""
Cart and reservation flow.
The cart holds copies of vehicles taken at add time, unique by id.
Checkout snapshots the cart into an immutable Reservation and empties it.
Both lists live in memory only.
"""

from datetime import datetime
from typing import Optional

from app.config import settings
from app.exceptions import DuplicateCartItemError, NotFoundError
from app.schemas.reservation import Reservation
from app.services.catalog_state import CatalogState
from app.services.notice_service import Notice
from app.services.view_router import View
from app.utils.logger import get_logger

logger = get_logger(__name__)


def add_to_cart(state: CatalogState, vehicle_id: int) -> Notice:
    vehicle = state.get_vehicle(vehicle_id)
    if vehicle is None:
        raise NotFoundError(f"Vehicle {vehicle_id} not found")

    if state.in_cart(vehicle_id):
        state.notices.error("Vehicle already selected.", "cart.duplicate")
        raise DuplicateCartItemError(f"Vehicle {vehicle_id} is already in the cart")

    state.push_cart_item(vehicle)
    logger.info(f"🛒 Added vehicle {vehicle_id} ({vehicle.model}) — cart size {len(state.cart)}")
    return state.notices.success("Added to cart.", "cart.added")


def remove_from_cart(state: CatalogState, vehicle_id: int):
    state.drop_cart_item(vehicle_id)


def finalize_reservation(state: CatalogState, now: Optional[datetime] = None) -> Optional[Reservation]:
    """Returns the new reservation, or None when the cart was empty (no-op)."""
    cart = state.cart
    if not cart:
        return None

    user = state.current_user
    reservation = Reservation(
        created_at=now or datetime.now(),
        client=user.username if user else settings.GUEST_NAME,
        email=(user.email or settings.GUEST_EMAIL) if user else settings.GUEST_EMAIL,
        items=tuple(item.model_copy(deep=True) for item in cart),
    )
    state.append_reservation(reservation)
    state.clear_cart()
    state.set_view(View.CATALOG)
    logger.info(f"📝 Reservation for {reservation.client}: {len(reservation.items)} vehicles")
    state.notices.success("Reservation confirmed. We will contact you shortly.", "reservation.confirmed")
    return reservation
