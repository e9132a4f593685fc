# app/schemas/reservation.py
from pydantic import BaseModel, ConfigDict
from datetime import datetime

from app.schemas.vehicle import Vehicle


class Reservation(BaseModel):
    """Checkout snapshot. Never mutated once created."""
    model_config = ConfigDict(frozen=True)

    created_at: datetime
    client: str
    email: str
    items: tuple[Vehicle, ...]
