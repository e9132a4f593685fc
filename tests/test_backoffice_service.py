"""Unit tests for the inventory form (create/edit) and delete."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock, AsyncMock
from app.exceptions import NotFoundError, RemoteStoreError
from app.schemas.vehicle import Vehicle, VehicleForm
from app.services import backoffice_service
from app.services.catalog_state import CatalogState


def make_state():
    state = CatalogState()
    state.replace_vehicles([
        Vehicle(id=1, model="Civic", year="2020", description="Sedan", image_url="http://img/1.jpg"),
        Vehicle(id=2, model="Jazz", year="2018", description=None, image_url="http://img/2.jpg"),
        Vehicle(id=3, model="CR-V", year="2022", description="SUV", image_url="http://img/3.jpg"),
    ])
    return state


def make_client():
    client = MagicMock()
    client.create_vehicle = AsyncMock()
    client.update_vehicle = AsyncMock(return_value=None)
    client.delete_vehicle = AsyncMock(return_value=None)
    return client


def make_form(**overrides):
    fields = dict(model="HR-V", year="2023", description="Crossover", image_url="http://img/hrv.jpg")
    fields.update(overrides)
    return VehicleForm(**fields)


class TestEditTarget:
    def test_begin_edit_prefills_draft(self):
        state = make_state()
        draft = backoffice_service.begin_edit(state, 2)
        assert state.edit_target_id == 2
        assert draft.model == "Jazz"
        assert draft.description == ""

    def test_begin_edit_unknown(self):
        with pytest.raises(NotFoundError):
            backoffice_service.begin_edit(make_state(), 9)

    def test_cancel_edit(self):
        state = make_state()
        backoffice_service.begin_edit(state, 1)
        backoffice_service.cancel_edit(state)
        assert state.edit_target_id is None
        assert state.draft.model == ""


class TestSubmit:
    @pytest.mark.asyncio
    async def test_create_appends_returned_record(self):
        state = make_state()
        client = make_client()
        form = make_form()
        client.create_vehicle.return_value = Vehicle(id=10, **form.model_dump())

        notice = await backoffice_service.submit_form(state, client, form)

        client.create_vehicle.assert_awaited_once_with(form)
        client.update_vehicle.assert_not_called()
        assert state.vehicles[-1].id == 10
        assert notice.code == "inventory.created"

    @pytest.mark.asyncio
    async def test_update_merges_into_target_only(self):
        state = make_state()
        client = make_client()
        backoffice_service.begin_edit(state, 1)
        untouched = [v.model_dump() for v in state.vehicles if v.id != 1]
        form = make_form(model="Civic e:HEV", year="2024")

        notice = await backoffice_service.submit_form(state, client, form)

        client.update_vehicle.assert_awaited_once_with(1, form)
        client.create_vehicle.assert_not_called()
        updated = state.get_vehicle(1)
        assert (updated.model, updated.year, updated.description, updated.image_url) == \
               ("Civic e:HEV", "2024", "Crossover", "http://img/hrv.jpg")
        assert [v.model_dump() for v in state.vehicles if v.id != 1] == untouched
        assert notice.code == "inventory.updated"
        assert state.edit_target_id is None
        assert state.draft.model == ""

    @pytest.mark.asyncio
    async def test_failed_save_leaves_everything_unchanged(self):
        state = make_state()
        client = make_client()
        client.update_vehicle.side_effect = RemoteStoreError("down")
        backoffice_service.begin_edit(state, 3)
        before = [v.model_dump() for v in state.vehicles]

        with pytest.raises(RemoteStoreError):
            await backoffice_service.submit_form(state, client, make_form())

        assert [v.model_dump() for v in state.vehicles] == before
        assert state.edit_target_id == 3
        assert state.draft.model == "CR-V"
        assert state.notices.pending.code == "inventory.save_failed"

    @pytest.mark.asyncio
    async def test_failed_create(self):
        state = make_state()
        client = make_client()
        client.create_vehicle.side_effect = RemoteStoreError("down")

        with pytest.raises(RemoteStoreError):
            await backoffice_service.submit_form(state, client, make_form())

        assert len(state.vehicles) == 3


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_filters_id_out(self):
        state = make_state()
        client = make_client()
        others = [v.model_dump() for v in state.vehicles if v.id != 2]

        notice = await backoffice_service.delete_vehicle(state, client, 2)

        client.delete_vehicle.assert_awaited_once_with(2)
        assert state.get_vehicle(2) is None
        assert [v.model_dump() for v in state.vehicles] == others
        assert notice.code == "inventory.deleted"

    @pytest.mark.asyncio
    async def test_delete_of_edit_target_resets_form(self):
        state = make_state()
        backoffice_service.begin_edit(state, 2)
        await backoffice_service.delete_vehicle(state, make_client(), 2)
        assert state.edit_target_id is None

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_vehicle(self):
        state = make_state()
        client = make_client()
        client.delete_vehicle.side_effect = RemoteStoreError("down")

        with pytest.raises(RemoteStoreError):
            await backoffice_service.delete_vehicle(state, client, 2)

        assert state.get_vehicle(2) is not None
        assert state.notices.pending.code == "inventory.delete_failed"
