# app/services/catalog_client.py
"""
Remote Catalog Store client — the spreadsheet-backed HTTP API.

Vehicles:  GET/POST {CATALOG_API_URL}, PUT/DELETE {CATALOG_API_URL}/{id}
Users:     GET/POST {USERS_API_URL}            (AUTH_MODE=remote only)

Bodies wrap single records under a root key ({"carro": {...}}) and
collections under a plural key ({"carros": [...]}). Records are normalized
into the canonical Vehicle/User shape here and nowhere else.
No retries: every failure surfaces as RemoteStoreError.
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.config import settings
from app.exceptions import RemoteStoreError
from app.schemas.user import User
from app.schemas.vehicle import Vehicle, VehicleFields
from app.utils.json_parser import unwrap_collection, unwrap_record
from app.utils.logger import get_logger, redact_for_log

logger = get_logger(__name__)


class CatalogStoreClient:
    def __init__(
        self,
        catalog_url: str,
        users_url: str,
        catalog_collection_key: Optional[str] = None,
        catalog_record_key: str = "carro",
        users_collection_key: Optional[str] = None,
        users_record_key: str = "user",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.catalog_url = catalog_url.rstrip("/")
        self.users_url = users_url.rstrip("/")
        # empty string from .env means "discover"
        self.catalog_collection_key = catalog_collection_key or None
        self.catalog_record_key = catalog_record_key
        self.users_collection_key = users_collection_key or None
        self.users_record_key = users_record_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "CatalogStoreClient":
        return cls(
            catalog_url=settings.CATALOG_API_URL,
            users_url=settings.USERS_API_URL,
            catalog_collection_key=settings.CATALOG_COLLECTION_KEY,
            catalog_record_key=settings.CATALOG_RECORD_KEY,
            users_collection_key=settings.USERS_COLLECTION_KEY,
            users_record_key=settings.USERS_RECORD_KEY,
            timeout=settings.REMOTE_TIMEOUT_SECONDS,
        )

    # ── transport ─────────────────────────────────────────────────────────

    async def _request(self, method: str, url: str, json: Optional[dict] = None) -> Any:
        """One HTTP round-trip. Returns decoded JSON (None for empty bodies)."""
        if json is not None:
            logger.debug(f"{method} {url} payload={redact_for_log(json)}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"❌ {method} {url} failed: {e}")
            raise RemoteStoreError(f"{method} {url} failed: {e}", endpoint=url) from e

        if response.status_code >= 400:
            logger.warning(f"⚠️  {method} {url} returned HTTP {response.status_code}")
            raise RemoteStoreError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                endpoint=url,
            )

        logger.debug(f"{method} {url} → {response.status_code}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteStoreError(
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
                endpoint=url,
            ) from e

    # ── vehicles ──────────────────────────────────────────────────────────

    async def list_vehicles(self) -> list[Vehicle]:
        body = await self._request("GET", self.catalog_url)
        vehicles = []
        for raw in unwrap_collection(body, self.catalog_collection_key):
            try:
                vehicles.append(Vehicle.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed vehicle record {raw!r}: {e.error_count()} errors")
        return vehicles

    async def create_vehicle(self, fields: VehicleFields) -> Vehicle:
        payload = {self.catalog_record_key: fields.to_remote()}
        body = await self._request("POST", self.catalog_url, json=payload)
        record = unwrap_record(body, self.catalog_record_key)
        if record is None:
            raise RemoteStoreError("Create response carried no record", endpoint=self.catalog_url)
        try:
            return Vehicle.model_validate(record)
        except ValidationError as e:
            raise RemoteStoreError(f"Create response record is malformed: {e}", endpoint=self.catalog_url) from e

    async def update_vehicle(self, vehicle_id: int, fields: VehicleFields) -> None:
        payload = {self.catalog_record_key: fields.to_remote()}
        await self._request("PUT", f"{self.catalog_url}/{vehicle_id}", json=payload)

    async def delete_vehicle(self, vehicle_id: int) -> None:
        await self._request("DELETE", f"{self.catalog_url}/{vehicle_id}")

    # ── users ─────────────────────────────────────────────────────────────

    async def list_users(self) -> list[User]:
        body = await self._request("GET", self.users_url)
        users = []
        for raw in unwrap_collection(body, self.users_collection_key):
            try:
                users.append(User.model_validate(raw))
            except ValidationError:
                logger.warning("Skipping malformed user record")
        return users

    async def create_user(self, username: str, password: str, email: str) -> None:
        payload = {
            self.users_record_key: {
                "username": username,
                "password": password,
                "email": email,
                "admin": 0,
            }
        }
        await self._request("POST", self.users_url, json=payload)


_client: Optional[CatalogStoreClient] = None


def get_client() -> CatalogStoreClient:
    """FastAPI dependency — the configured Remote Catalog Store client."""
    global _client
    if _client is None:
        _client = CatalogStoreClient.from_settings()
    return _client
