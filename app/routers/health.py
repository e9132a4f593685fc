# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + session DB + Remote Catalog Store reachability.
"""

import requests
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from app.database import get_db
from app.config import settings
from app.services.catalog_state import CatalogState, get_state
from datetime import datetime

router = APIRouter()


def _ping(url: str) -> str:
    try:
        resp = requests.get(url, timeout=3)
        return "ok" if resp.status_code == 200 else f"http_{resp.status_code}"
    except requests.exceptions.ConnectionError:
        return "unreachable"
    except requests.exceptions.Timeout:
        return "timeout"
    except requests.exceptions.RequestException as e:
        return f"error: {e}"


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db), state: CatalogState = Depends(get_state)):
    """
    Returns:
    - Backend status
    - Session database connectivity
    - Remote store reachability (catalog, plus users in remote auth mode)
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "auth_mode": settings.AUTH_MODE,
        "vehicles_loaded": len(state.vehicles),
        "remote": {},
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    endpoints = {"catalog": settings.CATALOG_API_URL}
    if settings.remote_auth:
        endpoints["users"] = settings.USERS_API_URL
    for name, url in endpoints.items():
        result["remote"][name] = _ping(url)
        if result["remote"][name] != "ok":
            result["status"] = "degraded"

    return result
