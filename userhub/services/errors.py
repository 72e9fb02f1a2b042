"""Typed failures raised by the user service."""

from __future__ import annotations

from typing import Optional


class UserServiceError(Exception):
    """Base class for user workflow failures."""

    def __init__(self, message: str, *, field: Optional[str] = None, user_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.user_id = user_id


class InvalidInputError(UserServiceError):
    """Missing key, malformed value, bad identifier syntax or disallowed patch key."""


class ManagerNotFoundError(UserServiceError):
    def __init__(self, manager_id: str) -> None:
        super().__init__(f"manager_id not found: {manager_id}", field="manager_id")
        self.manager_id = manager_id


class ManagerInactiveError(UserServiceError):
    def __init__(self, manager_id: str) -> None:
        super().__init__(f"manager_id is not active: {manager_id}", field="manager_id")
        self.manager_id = manager_id


class DuplicateActiveMobileError(UserServiceError):
    """Raised when an active user already owns the mobile number."""


class UserNotFoundError(UserServiceError):
    pass


class AmbiguousMatchError(UserServiceError):
    """Raised when a mobile number resolves to more than one user."""


class InternalError(UserServiceError):
    """Unexpected store failure; the transaction was rolled back."""
