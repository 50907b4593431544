"""Pydantic schemas for API requests and responses."""

from userauth.schemas.auth import (
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    SessionUser,
    UpdatedUser,
    UpdateProfileRequest,
    UserRecord,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UpdateProfileRequest",
    "UserRecord",
    "SessionUser",
    "UpdatedUser",
    "ProfileResponse",
]
