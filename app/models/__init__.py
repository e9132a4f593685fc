from app.models.stored_session import StoredSession

__all__ = ["StoredSession"]
