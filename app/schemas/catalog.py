# app/schemas/catalog.py
from pydantic import BaseModel, Field


class SearchUpdate(BaseModel):
    text: str = ""


class ScrollEvent(BaseModel):
    """Viewport geometry reported by the client's scroll listener, in pixels."""
    viewport_height: float = Field(ge=0)
    scroll_y: float = Field(ge=0)
    content_height: float = Field(ge=0)
