# app/schemas/vehicle.py
"""
Canonical vehicle shape.

The spreadsheet API is inconsistent about field names (``descricao`` vs
``descrição``, ``fotourl`` vs ``fotoUrl``). Every record entering the
application goes through ``_normalize_variants`` once; every record leaving it
is written with ``to_remote()``. Nothing else in the code base looks at the
remote spellings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Optional

# canonical field → accepted remote spellings, in order of preference
FIELD_VARIANTS: dict[str, tuple[str, ...]] = {
    "model": ("model", "modelo"),
    "year": ("year", "ano"),
    "description": ("description", "descricao", "descrição"),
    "image_url": ("image_url", "fotourl", "fotoUrl"),
}


def _first_present(data: dict, keys: tuple[str, ...]) -> Any:
    """First truthy value among ``keys``; falls back to the first non-None one."""
    fallback = None
    for key in keys:
        value = data.get(key)
        if value:
            return value
        if value is not None and fallback is None:
            fallback = value
    return fallback


class VehicleFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _normalize_variants(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized = {k: v for k, v in data.items() if k not in _ALL_VARIANT_KEYS}
        for field_name, keys in FIELD_VARIANTS.items():
            value = _first_present(data, keys)
            if value is not None:
                normalized[field_name] = value
        return normalized

    @field_validator("model", "year", "description", "image_url", mode="before", check_fields=False)
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        # sheet cells that look numeric (years, model "2008") come back as numbers
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def to_remote(self) -> dict:
        """Record body in the spelling the Remote Catalog Store expects."""
        return {
            "modelo": self.model,
            "ano": str(self.year) if self.year is not None else "",
            "descricao": self.description,
            "fotourl": self.image_url,
        }


_ALL_VARIANT_KEYS = frozenset(k for keys in FIELD_VARIANTS.values() for k in keys)


class Vehicle(VehicleFields):
    """A catalog record as held in memory. ``id`` is assigned by the remote store."""
    id: int
    model: Optional[str] = None
    year: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class VehicleForm(VehicleFields):
    """Inventory form submission, used for both create and edit."""
    model: str = Field(min_length=1)
    year: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image_url: str = Field(min_length=1)

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle) -> "VehicleForm":
        return cls.model_construct(
            model=vehicle.model or "",
            year=vehicle.year or "",
            description=vehicle.description or "",
            image_url=vehicle.image_url or "",
        )

    @classmethod
    def blank(cls) -> "VehicleForm":
        return cls.model_construct(model="", year="", description="", image_url="")

