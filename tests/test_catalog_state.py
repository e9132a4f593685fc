"""Unit tests for the catalog state container and the view router."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock, AsyncMock
from app.exceptions import RemoteStoreError
from app.schemas.vehicle import Vehicle, VehicleForm
from app.services.catalog_state import CatalogState, load_catalog, near_bottom
from app.services.view_router import View, navigate, resolve_view

MODELS = ["Civic", "Civic Type R", "Jazz", "HR-V", "CR-V", "e:Ny1", "ZR-V", "Accord", "NSX", "City"]


def make_vehicle(vehicle_id, model="Civic", year="2020"):
    return Vehicle(id=vehicle_id, model=model, year=year,
                   description=f"{model} description", image_url=f"http://img/{vehicle_id}.jpg")


def make_state(models=MODELS):
    state = CatalogState(initial_visible=9, reveal_step=6, scroll_threshold=100)
    state.replace_vehicles([make_vehicle(i + 1, m) for i, m in enumerate(models)])
    return state


class TestSearch:
    @pytest.mark.parametrize("text", ["", "civic", "CIVIC", "r-v", "v", "type r", "zzz"])
    def test_displayed_set_is_case_insensitive_substring_match(self, text):
        state = make_state()
        state.set_search(text)
        expected = [v.id for v in state.vehicles if text.lower() in v.model.lower()]
        assert [v.id for v in state.filtered_vehicles()] == expected

    def test_vehicle_without_model_never_matches(self):
        state = make_state(["Civic"])
        state.apply_created(Vehicle(id=99))
        state.set_search("c")
        assert [v.id for v in state.filtered_vehicles()] == [1]
        state.set_search("")
        assert [v.id for v in state.filtered_vehicles()] == [1]
        assert [v.id for v in state.visible_vehicles()] == [1]
        assert state.has_more is False

    def test_search_resets_visible_count(self):
        state = make_state()
        state.reveal_more()
        assert state.visible_count == 15
        state.set_search("civic")
        assert state.visible_count == 9


class TestIncrementalReveal:
    def test_scroll_to_bottom_reveals_six_more(self):
        state = make_state()
        assert len(state.vehicles) == 10
        assert state.visible_count == 9
        assert len(state.visible_vehicles()) == 9
        assert state.has_more

        revealed = state.on_scroll(viewport_height=800, scroll_y=1200, content_height=2000)

        assert revealed
        assert state.visible_count == 15
        assert len(state.visible_vehicles()) == 10
        assert not state.has_more

    def test_scroll_far_from_bottom_is_ignored(self):
        state = make_state()
        assert not state.on_scroll(viewport_height=800, scroll_y=0, content_height=2000)
        assert state.visible_count == 9

    def test_near_bottom_threshold(self):
        assert near_bottom(800, 1100, 2000, 100)
        assert not near_bottom(800, 1099, 2000, 100)

    def test_visible_count_is_monotonic(self):
        state = make_state()
        counts = [state.reveal_more() for _ in range(3)]
        assert counts == [15, 21, 27]


class TestLocalPatches:
    def test_update_changes_only_target(self):
        state = make_state()
        before = {v.id: v.model_dump() for v in state.vehicles}
        form = VehicleForm(model="Civic e:HEV", year="2024", description="Hybrid", image_url="http://img/new.jpg")

        state.apply_updated(1, form)

        updated = state.get_vehicle(1)
        assert (updated.id, updated.model, updated.year, updated.description, updated.image_url) == \
               (1, "Civic e:HEV", "2024", "Hybrid", "http://img/new.jpg")
        for v in state.vehicles:
            if v.id != 1:
                assert v.model_dump() == before[v.id]

    def test_update_of_unknown_id_changes_nothing(self):
        state = make_state()
        before = [v.model_dump() for v in state.vehicles]
        form = VehicleForm(model="X", year="1", description="d", image_url="u")
        assert state.apply_updated(404, form) is None
        assert [v.model_dump() for v in state.vehicles] == before

    def test_delete_removes_only_target(self):
        state = make_state()
        others = [v.model_dump() for v in state.vehicles if v.id != 3]
        state.apply_removed(3)
        assert state.get_vehicle(3) is None
        assert [v.model_dump() for v in state.vehicles] == others

    def test_created_is_appended(self):
        state = make_state()
        state.apply_created(make_vehicle(11, "Prelude"))
        assert state.vehicles[-1].id == 11


class TestLoadCatalog:
    @pytest.mark.asyncio
    async def test_success_replaces_collection(self):
        state = CatalogState()
        client = MagicMock()
        client.list_vehicles = AsyncMock(return_value=[make_vehicle(1), make_vehicle(2, "Jazz")])

        loaded = await load_catalog(state, client)

        assert loaded == 2
        assert [v.id for v in state.vehicles] == [1, 2]

    @pytest.mark.asyncio
    async def test_failure_leaves_collection_empty(self):
        state = CatalogState()
        client = MagicMock()
        client.list_vehicles = AsyncMock(side_effect=RemoteStoreError("down"))

        loaded = await load_catalog(state, client)

        assert loaded == 0
        assert state.vehicles == []
        assert state.notices.pending is None


class TestViewRouter:
    def test_starts_on_catalog(self):
        assert resolve_view(make_state()) == View.CATALOG

    def test_selection_moves_to_detail_and_back(self):
        state = make_state()
        state.select(2)
        assert resolve_view(state) == View.DETAIL
        state.clear_selection()
        assert resolve_view(state) == View.CATALOG

    def test_cart_navigation_clears_selection(self):
        state = make_state()
        state.select(2)
        assert navigate(state, View.CART) == View.CART
        assert state.selected_id is None

    def test_admin_navigation_keeps_selection(self):
        state = make_state()
        state.select(2)
        assert navigate(state, View.ADMIN) == View.ADMIN
        assert state.selected_id == 2
        assert navigate(state, View.CATALOG) == View.CATALOG
        assert state.selected_id is None

    def test_admin_then_back_shows_detail_again(self):
        state = make_state()
        state.select(2)
        navigate(state, View.ADMIN)
        state.set_view(View.CATALOG)
        assert resolve_view(state) == View.DETAIL

    def test_selection_of_deleted_vehicle_resolves_to_catalog(self):
        state = make_state()
        state.select(4)
        state.apply_removed(4)
        assert resolve_view(state) == View.CATALOG

    def test_detail_is_not_a_menu_target(self):
        with pytest.raises(ValueError):
            navigate(make_state(), View.DETAIL)
