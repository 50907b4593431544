"""FastAPI dependencies for authentication and the auth controller."""

from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from userauth.config import Settings, get_settings
from userauth.database import get_db
from userauth.services.auth import (
    PasswordHasher,
    TokenSigner,
    get_password_hasher,
    get_token_signer,
)
from userauth.services.auth_controller import AuthController
from userauth.services.user_store import UserStore

security = HTTPBearer(auto_error=False)

# Multipart field carrying the profile image
IMAGE_FIELD = "image"


def get_signer(settings: Annotated[Settings, Depends(get_settings)]) -> TokenSigner:
    """Get the token signer for the current settings."""
    return get_token_signer(settings)


def get_hasher(settings: Annotated[Settings, Depends(get_settings)]) -> PasswordHasher:
    """Get the password hasher for the current settings."""
    return get_password_hasher(settings)


def get_auth_controller(
    settings: Annotated[Settings, Depends(get_settings)],
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_hasher)],
    signer: Annotated[TokenSigner, Depends(get_signer)],
) -> AuthController:
    """Get the auth controller with its collaborators."""
    return AuthController(settings, UserStore(db), hasher, signer)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    signer: Annotated[TokenSigner, Depends(get_signer)],
) -> dict[str, Any]:
    """Get the verified claims of the bearer token on the request."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = signer.verify(credentials.credentials)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid token")

    return payload


@dataclass
class RequestBody:
    """Submitted fields plus the uploaded profile image, if any."""

    fields: dict[str, Any] = field(default_factory=dict)
    image: UploadFile | None = None


async def get_request_body(request: Request) -> RequestBody:
    """Read a JSON, urlencoded or multipart body.

    Form values that are files are kept out of ``fields``; the one sent as
    ``image`` becomes the uploaded profile image.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body"
            ) from None
        return RequestBody(fields=payload if isinstance(payload, dict) else {})

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        fields = {key: value for key, value in form.items() if not isinstance(value, UploadFile)}
        image = form.get(IMAGE_FIELD)
        return RequestBody(fields=fields, image=image if isinstance(image, UploadFile) else None)

    return RequestBody()
