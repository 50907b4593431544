"""SQLAlchemy models."""

from userauth.models.user import User

__all__ = [
    "User",
]
