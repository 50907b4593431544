"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.networks import validate_email


def check_plain_email(value: str) -> str:
    """Accept a bare address only: no display name and no surrounding spaces."""
    _, email = validate_email(value)
    if email.lower() != value.lower():
        raise ValueError("value is not a valid email address")
    return value


class RegisterRequest(BaseModel):
    """User registration form fields (the image arrives as a separate upload)."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=3)
    email: str = Field(..., min_length=5)
    password: str = Field(..., min_length=3)
    phone: int = Field(..., ge=9)
    address: str

    @field_validator("email")
    @classmethod
    def check_email_shape(cls, value: str) -> str:
        return check_plain_email(value)


class LoginRequest(BaseModel):
    """User login request."""

    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=5)
    password: str = Field(..., min_length=3)

    @field_validator("email")
    @classmethod
    def check_email_shape(cls, value: str) -> str:
        return check_plain_email(value)


class UpdateProfileRequest(BaseModel):
    """Full replacement of a user's profile fields. No length rules apply here."""

    name: str
    email: str
    password: str
    phone: int
    address: str


class UserRecord(BaseModel):
    """Every stored column of a user, password hash included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    password: str
    phone: int
    address: str
    image: str
    created_at: datetime | None = Field(None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(None, serialization_alias="updatedAt")


class SessionUser(BaseModel):
    """User as returned by the session check, with the image as a full URL."""

    id: int
    name: str
    email: str
    phone: int
    address: str
    image: str


class UpdatedUser(BaseModel):
    """User as returned after a profile update."""

    name: str
    email: str
    password: str
    phone: int
    address: str
    image: str


class ProfileResponse(BaseModel):
    """Public profile projection: no password, image or timestamps."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: int
    address: str


def validation_error_body(exc: ValidationError) -> dict:
    """Describe a failed validation as ``{"message": ..., "details": [...]}``."""
    details = [
        {
            "message": error["msg"],
            "path": [str(part) for part in error["loc"]],
            "type": error["type"],
        }
        for error in exc.errors(include_url=False)
    ]
    message = "; ".join(f"{'.'.join(d['path']) or 'body'}: {d['message']}" for d in details)
    return {"message": message, "details": details}
