# app/services/catalog_state.py
"""
Process-wide storefront state.

CatalogState is the only holder of the vehicle collection, view flag,
selection, search text, reveal count, cart, reservations, session user and
back-office draft. Services and routers change it through its methods only.
All mutation happens on the event loop (request handlers, startup hook).
"""

from typing import Optional

from app.config import settings
from app.exceptions import RemoteStoreError
from app.schemas.reservation import Reservation
from app.schemas.user import User
from app.schemas.vehicle import Vehicle, VehicleFields, VehicleForm
from app.services.notice_service import NoticeBoard
from app.services.view_router import View
from app.utils.logger import get_logger

logger = get_logger(__name__)


def near_bottom(viewport_height: float, scroll_y: float, content_height: float, threshold: float) -> bool:
    """True when the viewport's bottom edge is within ``threshold`` px of the content end."""
    return viewport_height + scroll_y >= content_height - threshold


class CatalogState:
    def __init__(
        self,
        initial_visible: int = 9,
        reveal_step: int = 6,
        scroll_threshold: int = 100,
    ):
        self.initial_visible = initial_visible
        self.reveal_step = reveal_step
        self.scroll_threshold = scroll_threshold

        self._vehicles: list[Vehicle] = []
        self._search_text = ""
        self._visible_count = initial_visible
        self._view = View.CATALOG
        self._selected_id: Optional[int] = None
        self._cart: list[Vehicle] = []
        self._reservations: list[Reservation] = []
        self._current_user: Optional[User] = None
        self._edit_target_id: Optional[int] = None
        self._draft = VehicleForm.blank()
        self.notices = NoticeBoard()

    @classmethod
    def from_settings(cls) -> "CatalogState":
        return cls(
            initial_visible=settings.CATALOG_INITIAL_VISIBLE,
            reveal_step=settings.CATALOG_REVEAL_STEP,
            scroll_threshold=settings.SCROLL_THRESHOLD_PX,
        )

    # ── read access ───────────────────────────────────────────────────────

    @property
    def vehicles(self) -> list[Vehicle]:
        return list(self._vehicles)

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def visible_count(self) -> int:
        return self._visible_count

    @property
    def view(self) -> View:
        return self._view

    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    @property
    def cart(self) -> list[Vehicle]:
        return list(self._cart)

    @property
    def reservations(self) -> list[Reservation]:
        return list(self._reservations)

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def edit_target_id(self) -> Optional[int]:
        return self._edit_target_id

    @property
    def draft(self) -> VehicleForm:
        return self._draft

    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        for vehicle in self._vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    # ── collection ────────────────────────────────────────────────────────

    def replace_vehicles(self, vehicles: list[Vehicle]):
        self._vehicles = list(vehicles)

    def apply_created(self, vehicle: Vehicle):
        self._vehicles.append(vehicle)

    def apply_updated(self, vehicle_id: int, fields: VehicleFields) -> Optional[Vehicle]:
        """Merge submitted fields into the record with ``vehicle_id``; others untouched."""
        for i, vehicle in enumerate(self._vehicles):
            if vehicle.id == vehicle_id:
                updated = vehicle.model_copy(update={
                    "model": fields.model,
                    "year": fields.year,
                    "description": fields.description,
                    "image_url": fields.image_url,
                    "id": vehicle_id,
                })
                self._vehicles[i] = updated
                return updated
        return None

    def apply_removed(self, vehicle_id: int):
        self._vehicles = [v for v in self._vehicles if v.id != vehicle_id]

    # ── search & incremental reveal ───────────────────────────────────────

    def set_search(self, text: str):
        self._search_text = text or ""
        self._visible_count = self.initial_visible

    def filtered_vehicles(self) -> list[Vehicle]:
        needle = self._search_text.lower()
        # records without a model name are hidden even for the empty search
        return [v for v in self._vehicles if v.model and needle in v.model.lower()]

    def visible_vehicles(self) -> list[Vehicle]:
        return self.filtered_vehicles()[: self._visible_count]

    @property
    def has_more(self) -> bool:
        return self._visible_count < len(self.filtered_vehicles())

    def reveal_more(self) -> int:
        self._visible_count += self.reveal_step
        return self._visible_count

    def on_scroll(self, viewport_height: float, scroll_y: float, content_height: float) -> bool:
        if near_bottom(viewport_height, scroll_y, content_height, self.scroll_threshold):
            self.reveal_more()
            return True
        return False

    # ── view & selection ──────────────────────────────────────────────────

    def set_view(self, view: View):
        self._view = view

    def select(self, vehicle_id: int):
        self._selected_id = vehicle_id
        self._view = View.CATALOG

    def clear_selection(self):
        self._selected_id = None

    # ── cart & reservations ───────────────────────────────────────────────

    def in_cart(self, vehicle_id: int) -> bool:
        return any(item.id == vehicle_id for item in self._cart)

    def push_cart_item(self, vehicle: Vehicle):
        self._cart.append(vehicle.model_copy(deep=True))

    def drop_cart_item(self, vehicle_id: int):
        self._cart = [item for item in self._cart if item.id != vehicle_id]

    def clear_cart(self):
        self._cart = []

    def append_reservation(self, reservation: Reservation):
        self._reservations.append(reservation)

    # ── session ───────────────────────────────────────────────────────────

    def set_user(self, user: Optional[User]):
        self._current_user = user

    # ── back-office draft ─────────────────────────────────────────────────

    def set_edit_target(self, vehicle_id: Optional[int], draft: VehicleForm):
        self._edit_target_id = vehicle_id
        self._draft = draft

    def reset_draft(self):
        self._edit_target_id = None
        self._draft = VehicleForm.blank()


async def load_catalog(state: CatalogState, client) -> int:
    """
    Bulk-load the vehicle collection. Failure is logged and leaves the
    collection as it was (empty on startup); no retry, no notice.
    """
    try:
        vehicles = await client.list_vehicles()
    except RemoteStoreError as e:
        logger.error(f"Catalog load failed: {e}")
        return 0
    state.replace_vehicles(vehicles)
    logger.info(f"📦 Catalog loaded: {len(vehicles)} vehicles")
    return len(vehicles)


_state: Optional[CatalogState] = None


def get_state() -> CatalogState:
    """FastAPI dependency — the single process-wide state."""
    global _state
    if _state is None:
        _state = CatalogState.from_settings()
    return _state
