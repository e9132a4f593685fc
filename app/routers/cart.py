# app/routers/cart.py
"""Cart + reservation checkout."""

from fastapi import APIRouter, Depends, HTTPException

from app.exceptions import DuplicateCartItemError, NotFoundError
from app.services.cart_service import add_to_cart, finalize_reservation, remove_from_cart
from app.services.catalog_state import CatalogState, get_state
from app.services.screen_service import cart_screen

router = APIRouter()


@router.get("/cart", summary="Cart contents")
def get_cart(state: CatalogState = Depends(get_state)):
    return cart_screen(state)


@router.post("/cart/items/{vehicle_id}", summary="Add a vehicle to the cart")
def add_item(vehicle_id: int, state: CatalogState = Depends(get_state)):
    try:
        notice = add_to_cart(state, vehicle_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    except DuplicateCartItemError:
        raise HTTPException(status_code=409, detail=state.notices.pending.as_dict())
    return {"notice": notice.as_dict(), "cart_count": len(state.cart)}


@router.delete("/cart/items/{vehicle_id}", summary="Remove a vehicle from the cart")
def remove_item(vehicle_id: int, state: CatalogState = Depends(get_state)):
    remove_from_cart(state, vehicle_id)
    return cart_screen(state)


@router.post("/cart/checkout", summary="Confirm the reservation")
def checkout(state: CatalogState = Depends(get_state)):
    """Empty cart is a no-op: status 'empty', nothing recorded."""
    reservation = finalize_reservation(state)
    if reservation is None:
        return {"status": "empty", "reservation": None}
    return {
        "status": "confirmed",
        "reservation": reservation.model_dump(mode="json"),
        "notice": state.notices.pending.as_dict(),
    }
