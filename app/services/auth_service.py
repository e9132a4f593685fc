# app/services/auth_service.py
"""
Back-office authentication and authorization.

AUTH_MODE=static  — one credential pair from configuration, always admin.
AUTH_MODE=remote  — users come from the Remote User Store; the spreadsheet
                    keeps passwords as plain strings, so the comparison is a
                    string match (constant-time). Registration is available.

A successful login becomes the session user and is persisted (minus the
password) so it survives a restart. Admin access needs admin flag == 1.
"""

import hmac
from typing import Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import AuthenticationError, DuplicateUsernameError, RemoteStoreError
from app.schemas.user import User
from app.services.catalog_state import CatalogState
from app.services.notice_service import Notice
from app.services.session_store import clear_session_user, load_session_user, save_session_user
from app.services.view_router import View
from app.utils.logger import get_logger

logger = get_logger(__name__)

GATE_LOGIN = "login"
GATE_RESTRICTED = "restricted"
GATE_BACKOFFICE = "backoffice"


def _same(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return hmac.compare_digest(str(a).encode("utf-8"), str(b).encode("utf-8"))


def find_user(users: list[User], username: str, password: str) -> Optional[User]:
    for user in users:
        if user.username == username and _same(user.password, password):
            return user
    return None


async def authenticate(client, username: str, password: str) -> User:
    """Resolve credentials to a User. Raises AuthenticationError / RemoteStoreError."""
    if not settings.remote_auth:
        if _same(username, settings.ADMIN_USERNAME) and _same(password, settings.ADMIN_PASSWORD):
            return User(username=settings.ADMIN_USERNAME, email="", admin=1)
        raise AuthenticationError("Invalid credentials")

    users = await client.list_users()
    user = find_user(users, username, password)
    if user is None:
        raise AuthenticationError("Invalid credentials")
    return user


async def login(state: CatalogState, client, db: Session, username: str, password: str) -> Notice:
    try:
        user = await authenticate(client, username, password)
    except RemoteStoreError:
        state.notices.error("Connection error.", "auth.connection")
        raise
    except AuthenticationError:
        logger.warning(f"🔒 Failed login for '{username}'")
        state.notices.error("Invalid credentials.", "auth.invalid")
        raise

    session_user = user.model_copy(update={"password": None})
    state.set_user(session_user)
    save_session_user(db, session_user)
    logger.info(f"🔓 {session_user.username} logged in (admin={session_user.is_admin})")
    return state.notices.success(f"Welcome, {session_user.username}.", "auth.login")


async def register(state: CatalogState, client, username: str, password: str, email: str) -> Notice:
    """Create a non-admin account in the Remote User Store."""
    try:
        users = await client.list_users()
        if any(u.username == username for u in users):
            state.notices.error("User already exists.", "auth.duplicate")
            raise DuplicateUsernameError(f"Username '{username}' already exists")
        await client.create_user(username, password, email)
    except RemoteStoreError:
        state.notices.error("Registration error.", "auth.register_failed")
        raise

    logger.info(f"👤 Registered new user '{username}'")
    return state.notices.success("Account created. Please log in.", "auth.registered")


def logout(state: CatalogState, db: Session) -> Notice:
    user = state.current_user
    state.set_user(None)
    clear_session_user(db)
    state.set_view(View.CATALOG)
    if user:
        logger.info(f"👋 {user.username} logged out")
    return state.notices.info("Logged out.", "auth.logout")


def admin_gate(state: CatalogState) -> str:
    user = state.current_user
    if user is None:
        return GATE_LOGIN
    if not user.is_admin:
        return GATE_RESTRICTED
    return GATE_BACKOFFICE


def restore_session(state: CatalogState, db: Session) -> Optional[User]:
    """Startup: adopt the persisted session user, if any."""
    user = load_session_user(db)
    if user is not None:
        state.set_user(user)
        logger.info(f"♻️  Restored session for {user.username}")
    return user
