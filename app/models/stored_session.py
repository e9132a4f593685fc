# app/models/stored_session.py
"""
Durable session record.
One row per fixed key (``settings.SESSION_KEY``) holding the serialized
session user, so a logged-in user survives a backend restart.
"""

from sqlalchemy import Column, String, DateTime, Text
from app.database import Base


class StoredSession(Base):
    __tablename__ = "stored_sessions"

    key = Column(String(50), primary_key=True)
    payload = Column(Text, nullable=False)
    saved_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<StoredSession {self.key} saved_at={self.saved_at}>"
