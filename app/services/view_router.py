# app/services/view_router.py
"""
Maps the current storefront state to exactly one screen.

    admin   — view flag is ADMIN (further gated by auth_service.admin_gate)
    cart    — view flag is CART
    detail  — a vehicle is selected and still in the collection
    catalog — everything else
"""

import enum


class View(str, enum.Enum):
    CATALOG = "catalog"
    DETAIL = "detail"
    CART = "cart"
    ADMIN = "admin"


# menu targets a user can navigate to directly
NAVIGABLE = (View.CATALOG, View.CART, View.ADMIN)


def resolve_view(state) -> View:
    if state.view == View.ADMIN:
        return View.ADMIN
    if state.view == View.CART:
        return View.CART
    if state.selected_id is not None and state.get_vehicle(state.selected_id) is not None:
        return View.DETAIL
    return View.CATALOG


def navigate(state, target: View) -> View:
    """
    Menu navigation. Catalog and cart drop the selection, admin keeps it so
    leaving the back-office returns to the vehicle that was open.
    """
    if target not in NAVIGABLE:
        raise ValueError(f"Cannot navigate directly to {target.value}")
    if target in (View.CATALOG, View.CART):
        state.clear_selection()
    state.set_view(target)
    return resolve_view(state)
