# app/exceptions.py
"""Exception hierarchy for the storefront services."""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for all storefront errors."""


class RemoteStoreError(StorefrontError):
    """Remote Catalog Store call failed (network, non-2xx, undecodable body)."""

    def __init__(self, message: str, status_code: Optional[int] = None, endpoint: str = ""):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ValidationFailure(StorefrontError):
    """User input rejected; the action is aborted."""


class DuplicateCartItemError(ValidationFailure):
    """Vehicle is already in the cart."""


class DuplicateUsernameError(ValidationFailure):
    """Username is already registered in the Remote User Store."""


class AuthenticationError(StorefrontError):
    """Credentials did not match."""


class NotFoundError(StorefrontError):
    """No vehicle with the requested identifier."""
