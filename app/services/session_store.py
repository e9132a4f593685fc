# app/services/session_store.py
"""
Durable session storage — survives a backend restart.
Stores one serialized User (without password) under a fixed key.
Malformed content is logged and treated as "no session".
"""

import json
from datetime import datetime
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.stored_session import StoredSession
from app.schemas.user import User
from app.utils.json_parser import safe_parse_json
from app.utils.logger import get_logger

logger = get_logger(__name__)


def load_session_user(db: Session, key: Optional[str] = None) -> Optional[User]:
    key = key or settings.SESSION_KEY
    row = db.query(StoredSession).filter(StoredSession.key == key).first()
    if row is None:
        return None

    data = safe_parse_json(row.payload)
    if not isinstance(data, dict):
        logger.error(f"Stored session '{key}' is not valid JSON — ignoring it")
        return None
    try:
        return User.model_validate(data)
    except ValidationError as e:
        logger.error(f"Stored session '{key}' is malformed — ignoring it ({e.error_count()} errors)")
        return None


def save_session_user(db: Session, user: User, key: Optional[str] = None):
    key = key or settings.SESSION_KEY
    payload = json.dumps(user.session_view())
    row = db.query(StoredSession).filter(StoredSession.key == key).first()
    if row is None:
        db.add(StoredSession(key=key, payload=payload, saved_at=datetime.utcnow()))
    else:
        row.payload = payload
        row.saved_at = datetime.utcnow()
    db.commit()
    logger.info(f"💾 Session saved for {user.username}")


def clear_session_user(db: Session, key: Optional[str] = None):
    key = key or settings.SESSION_KEY
    db.query(StoredSession).filter(StoredSession.key == key).delete()
    db.commit()
