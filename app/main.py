# app/main.py
"""
FastAPI application entry point.
Includes security middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import storefront, cart, auth, admin, health
from app.database import create_tables, SessionLocal
from app.config import settings
from app.services.auth_service import restore_session
from app.services.catalog_client import get_client
from app.services.catalog_state import get_state, load_catalog
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Stand Honda Storefront API",
    description="Vehicle catalog storefront + back-office over a spreadsheet-backed store.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (the storefront UI is served from another origin) ───────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}
        if request.url.path in open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(storefront.router, prefix="/api/v1", tags=["🚗 Storefront"])
app.include_router(cart.router,       prefix="/api/v1", tags=["🛒 Cart"])
app.include_router(auth.router,       prefix="/api/v1", tags=["🔑 Auth"])
app.include_router(admin.router,      prefix="/api/v1", tags=["🛠  Backoffice"])
app.include_router(health.router,     prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Storefront backend starting up...")
    create_tables()
    logger.info("✅ Session table ready")

    state = get_state()
    db = SessionLocal()
    try:
        restore_session(state, db)
    finally:
        db.close()

    if settings.remote_auth:
        logger.warning("⚠️  AUTH_MODE=remote: the remote user store keeps plaintext passwords")

    await load_catalog(state, get_client())
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Storefront backend shutting down...")
