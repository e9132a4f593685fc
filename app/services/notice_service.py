# app/services/notice_service.py
"""
User-facing notices.
One notice per user action that reports an outcome. The notice is returned
with the action response and also kept as "pending" so the next screen
request shows it once.
"""

from dataclasses import dataclass, asdict
from typing import Optional

from app.utils.logger import get_logger

logger = get_logger(__name__)

INFO = "info"
SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: str          # info | success | error
    message: str
    code: str           # machine-readable, e.g. "cart.duplicate"

    def as_dict(self) -> dict:
        return asdict(self)


class NoticeBoard:
    def __init__(self):
        self._pending: Optional[Notice] = None

    def post(self, level: str, message: str, code: str) -> Notice:
        notice = Notice(level=level, message=message, code=code)
        if level == ERROR:
            logger.warning(f"[NOTICE][{code}] {message}")
        else:
            logger.info(f"[NOTICE][{code}] {message}")
        self._pending = notice
        return notice

    def success(self, message: str, code: str) -> Notice:
        return self.post(SUCCESS, message, code)

    def error(self, message: str, code: str) -> Notice:
        return self.post(ERROR, message, code)

    def info(self, message: str, code: str) -> Notice:
        return self.post(INFO, message, code)

    @property
    def pending(self) -> Optional[Notice]:
        return self._pending

    def take(self) -> Optional[Notice]:
        """Return the pending notice and clear it."""
        notice, self._pending = self._pending, None
        return notice
