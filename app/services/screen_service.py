# app/services/screen_service.py
"""
Builds the JSON "screen" for the current state: exactly one of catalog,
detail, cart or admin, plus the navigation summary and the pending notice.
"""

from app.config import settings
from app.schemas.vehicle import Vehicle
from app.services.auth_service import GATE_BACKOFFICE, GATE_LOGIN, GATE_RESTRICTED, admin_gate
from app.services.catalog_state import CatalogState
from app.services.view_router import View, resolve_view

NO_DESCRIPTION = "No description available."


def _card(vehicle: Vehicle) -> dict:
    return {
        "id": vehicle.id,
        "model": vehicle.model,
        "year": vehicle.year,
        "image_url": vehicle.image_url,
    }


def nav_summary(state: CatalogState) -> dict:
    user = state.current_user
    return {
        "active": state.view.value,
        "cart_count": len(state.cart),
        "account_label": user.username if user else "Login",
        "logged_in": user is not None,
    }


def catalog_screen(state: CatalogState) -> dict:
    filtered = state.filtered_vehicles()
    return {
        "search_text": state.search_text,
        "visible_count": state.visible_count,
        "total": len(filtered),
        "has_more": state.has_more,
        "vehicles": [_card(v) for v in state.visible_vehicles()],
    }


def detail_screen(state: CatalogState) -> dict:
    vehicle = state.get_vehicle(state.selected_id)
    return {
        "vehicle": {
            **_card(vehicle),
            "description": vehicle.description or NO_DESCRIPTION,
        },
        "in_cart": state.in_cart(vehicle.id),
    }


def cart_screen(state: CatalogState) -> dict:
    items = state.cart
    return {
        "items": [_card(v) for v in items],
        "count": len(items),
        "empty": not items,
    }


def admin_screen(state: CatalogState) -> dict:
    gate = admin_gate(state)
    if gate == GATE_LOGIN:
        return {
            "gate": GATE_LOGIN,
            "auth_mode": settings.AUTH_MODE,
            "registration_enabled": settings.remote_auth,
        }
    if gate == GATE_RESTRICTED:
        return {
            "gate": GATE_RESTRICTED,
            "username": state.current_user.username,
            "message": "Your account does not have administrator privileges.",
        }
    return {
        "gate": GATE_BACKOFFICE,
        "reservations": [r.model_dump(mode="json") for r in state.reservations],
        "inventory": [_card(v) for v in state.vehicles],
        "edit_target_id": state.edit_target_id,
        "form_mode": "edit" if state.edit_target_id is not None else "create",
        "form": state.draft.model_dump(),
    }


_BUILDERS = {
    View.CATALOG: catalog_screen,
    View.DETAIL: detail_screen,
    View.CART: cart_screen,
    View.ADMIN: admin_screen,
}


def build_screen(state: CatalogState) -> dict:
    view = resolve_view(state)
    notice = state.notices.take()
    return {
        "view": view.value,
        "selected_id": state.selected_id if view == View.DETAIL else None,
        "nav": nav_summary(state),
        "content": _BUILDERS[view](state),
        "notice": notice.as_dict() if notice else None,
    }
