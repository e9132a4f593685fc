# app/routers/auth.py
"""Login / registration / logout for the back-office."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.exceptions import AuthenticationError, DuplicateUsernameError, RemoteStoreError
from app.schemas.user import LoginRequest, RegisterRequest
from app.services import auth_service
from app.services.catalog_client import CatalogStoreClient, get_client
from app.services.catalog_state import CatalogState, get_state

router = APIRouter()


@router.post("/auth/login", summary="Log in")
async def login(body: LoginRequest,
                state: CatalogState = Depends(get_state),
                client: CatalogStoreClient = Depends(get_client),
                db: Session = Depends(get_db)):
    try:
        notice = await auth_service.login(state, client, db, body.username, body.password)
    except AuthenticationError:
        raise HTTPException(status_code=401, detail=state.notices.pending.as_dict())
    except RemoteStoreError:
        raise HTTPException(status_code=502, detail=state.notices.pending.as_dict())
    return {
        "notice": notice.as_dict(),
        "user": state.current_user.session_view(),
        "gate": auth_service.admin_gate(state),
    }


@router.post("/auth/register", summary="Create a (non-admin) account")
async def register(body: RegisterRequest,
                   state: CatalogState = Depends(get_state),
                   client: CatalogStoreClient = Depends(get_client)):
    if not settings.remote_auth:
        raise HTTPException(status_code=400, detail="Registration is disabled in static auth mode")
    try:
        notice = await auth_service.register(state, client, body.username, body.password, body.email)
    except DuplicateUsernameError:
        raise HTTPException(status_code=409, detail=state.notices.pending.as_dict())
    except RemoteStoreError:
        raise HTTPException(status_code=502, detail=state.notices.pending.as_dict())
    return {"notice": notice.as_dict()}


@router.post("/auth/logout", summary="Log out")
def logout(state: CatalogState = Depends(get_state), db: Session = Depends(get_db)):
    notice = auth_service.logout(state, db)
    return {"notice": notice.as_dict()}
