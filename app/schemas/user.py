# app/schemas/user.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional


class User(BaseModel):
    """A Remote User Store record, or the single configured back-office user."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    username: str
    password: Optional[str] = None
    email: Optional[str] = ""
    admin: int = 0      # 1 = admin, anything else = regular account

    @field_validator("password", mode="before")
    @classmethod
    def _password_as_text(cls, value: Any) -> Any:
        # the spreadsheet turns numeric passwords into numbers
        return None if value is None else str(value)

    @field_validator("admin", mode="before")
    @classmethod
    def _admin_flag(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @property
    def is_admin(self) -> bool:
        return self.admin == 1

    def session_view(self) -> dict:
        """What gets persisted and shown to the client — never the password."""
        return self.model_dump(exclude={"password"})


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: str = Field(min_length=3)
