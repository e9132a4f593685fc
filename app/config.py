# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Remote Catalog Store (spreadsheet API) ────────────────────────────
    CATALOG_API_URL: str = "https://api.sheety.co/CHANGE_ME/standHonda/carros"
    CATALOG_COLLECTION_KEY: Optional[str] = "carros"   # None → auto-discover the list key
    CATALOG_RECORD_KEY: str = "carro"

    # ── Remote User Store (AUTH_MODE=remote only) ─────────────────────────
    USERS_API_URL: str = "https://api.sheety.co/CHANGE_ME/standHonda/users"
    USERS_COLLECTION_KEY: Optional[str] = "users"
    USERS_RECORD_KEY: str = "user"

    REMOTE_TIMEOUT_SECONDS: Optional[float] = None      # None = wait indefinitely

    # ── Authentication ────────────────────────────────────────────────────
    AUTH_MODE: str = "remote"       # remote | static
    ADMIN_USERNAME: str = "admin"   # AUTH_MODE=static only
    ADMIN_PASSWORD: str = "CHANGE_ME"

    # ── Catalog reveal ────────────────────────────────────────────────────
    CATALOG_INITIAL_VISIBLE: int = 9
    CATALOG_REVEAL_STEP: int = 6
    SCROLL_THRESHOLD_PX: int = 100

    # ── Reservations ──────────────────────────────────────────────────────
    GUEST_NAME: str = "Guest"
    GUEST_EMAIL: str = "N/A"

    # ── Session storage ───────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./storefront.db"
    SESSION_KEY: str = "user"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @property
    def remote_auth(self) -> bool:
        return self.AUTH_MODE.lower() == "remote"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
