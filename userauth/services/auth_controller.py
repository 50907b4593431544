"""Request handlers for registration, login, session check and profiles.

Each handler validates its input, talks to the user store, hashes and signs
where it mutates, and assembles a JSON response. Failures fall into three
tiers:

1. Validation errors return 400 with an ``error`` description before anything
   is written.
2. Business-rule failures (unknown user, wrong credentials) return a
   ``{"status": "failed"}`` body with a 4xx status.
3. Anything else raised inside a handler is logged and reported as a generic
   ``Server Error`` body. That response keeps the default 200 status.
"""

import logging
from typing import Any

from fastapi import status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from userauth.config import Settings
from userauth.schemas.auth import (
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    SessionUser,
    UpdatedUser,
    UpdateProfileRequest,
    UserRecord,
    validation_error_body,
)
from userauth.services.auth import PasswordHasher, TokenSigner
from userauth.services.uploads import save_upload
from userauth.services.user_store import UserStore

logger = logging.getLogger(__name__)

CREDENTIALS_FAILED_MESSAGE = "Email & Password not found"


def server_error() -> JSONResponse:
    """Generic failure body for unexpected errors. Carries no diagnostic detail."""
    return JSONResponse(content={"status": "failed", "message": "Server Error"})


def validation_failed(exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": validation_error_body(exc)},
    )


def credentials_failed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": "failed", "message": CREDENTIALS_FAILED_MESSAGE},
    )


class AuthController:
    """The five user-facing auth handlers.

    ``id`` is the controller's own identity reference. It is never assigned,
    and register and update_profile sign it into their tokens instead of the
    affected user's id, so those tokens carry ``{"id": null}``.
    """

    id: int | None = None

    def __init__(
        self,
        settings: Settings,
        store: UserStore,
        hasher: PasswordHasher,
        signer: TokenSigner,
    ):
        self.settings = settings
        self.store = store
        self.hasher = hasher
        self.signer = signer

    def image_url(self, filename: str) -> str:
        return self.settings.file_path + filename

    async def register(self, body: dict[str, Any], upload: UploadFile | None) -> JSONResponse:
        """Create a user from form fields plus an uploaded profile image."""
        try:
            data = RegisterRequest.model_validate(body)
        except ValidationError as e:
            logger.info(f"Registration rejected by validation: {e.error_count()} error(s)")
            return validation_failed(e)

        try:
            image = save_upload(upload, self.settings.upload_dir)
            hashed_password = await run_in_threadpool(self.hasher.hash, data.password)

            new_user = self.store.create(
                name=data.name,
                email=data.email,
                password=hashed_password,
                phone=data.phone,
                address=data.address,
                image=image,
            )
            logger.info(f"User created with ID: {new_user.id} for email: {data.email}")

            token = self.signer.sign({"id": self.id})

            return JSONResponse(
                status_code=status.HTTP_201_CREATED,
                content={
                    "status": "success",
                    "message": "register success",
                    "data": {
                        "newUser": UserRecord.model_validate(new_user).model_dump(
                            mode="json", by_alias=True
                        ),
                        "token": token,
                    },
                },
            )
        except Exception:
            logger.exception("Registration failed")
            return server_error()

    async def login(self, body: dict[str, Any]) -> JSONResponse:
        """Check an email and password pair and issue a token for the user."""
        try:
            credentials = LoginRequest.model_validate(body)
        except ValidationError as e:
            return validation_failed(e)

        try:
            user = self.store.find_by_email(credentials.email)
            if not user:
                logger.warning(f"Login failed for {credentials.email}: unknown email")
                return credentials_failed()

            is_valid = await run_in_threadpool(
                self.hasher.verify, credentials.password, user.password
            )
            if not is_valid:
                logger.warning(f"Login failed for {credentials.email}: wrong password")
                return credentials_failed()

            token = self.signer.sign({"id": user.id})
            logger.info(f"Login successful for user_id: {user.id}")

            return JSONResponse(
                content={
                    "status": "success",
                    "message": "login success",
                    "username": user.email,
                    "token": token,
                }
            )
        except Exception:
            logger.exception("Login failed")
            return server_error()

    async def check_auth(self, identity: dict[str, Any]) -> JSONResponse:
        """Return the user behind an already verified token."""
        try:
            user_id = identity["id"]
            user = self.store.find_by_id(user_id)
            if not user:
                return JSONResponse(
                    status_code=status.HTTP_404_NOT_FOUND, content={"status": "failed"}
                )

            session_user = SessionUser(
                id=user.id,
                name=user.name,
                email=user.email,
                phone=user.phone,
                address=user.address,
                image=self.image_url(user.image),
            )
            return JSONResponse(
                content={
                    "status": "success",
                    "message": f"check-auth {user_id} success",
                    "user": session_user.model_dump(),
                }
            )
        except Exception:
            logger.exception("Session check failed")
            return server_error()

    async def update_profile(
        self, user_id: str, body: dict[str, Any], upload: UploadFile | None
    ) -> JSONResponse:
        """Replace every profile field of a user, including password and image.

        The submitted password is always hashed again, so resubmitting the same
        plaintext still stores a new hash.
        """
        try:
            user_id = int(user_id)
            data = UpdateProfileRequest.model_validate(body)
            image = save_upload(upload, self.settings.upload_dir)
            hashed_password = await run_in_threadpool(self.hasher.hash, data.password)

            self.store.update(
                user_id,
                name=data.name,
                email=data.email,
                password=hashed_password,
                phone=data.phone,
                image=image,
                address=data.address,
            )

            token = self.signer.sign({"id": self.id})
            user = self.store.find_by_id(user_id)
            if user is None:
                raise LookupError(f"User {user_id} not found after update")

            updated = UpdatedUser(
                name=user.name,
                email=user.email,
                password=user.password,
                phone=user.phone,
                address=user.address,
                image=self.image_url(user.image),
            )
            return JSONResponse(
                status_code=status.HTTP_201_CREATED,
                content={
                    "status": "success",
                    "message": f"update user {user_id} success",
                    "updateUser": updated.model_dump(),
                    "token": token,
                },
            )
        except Exception:
            logger.exception(f"Profile update failed for user {user_id}")
            return server_error()

    async def get_profile(self, user_id: str) -> JSONResponse:
        """Return a user's public profile, or a null user when there is none."""
        try:
            user_id = int(user_id)
            user = self.store.find_by_id(user_id)
            profile = ProfileResponse.model_validate(user).model_dump() if user else None
            return JSONResponse(content={"status": "success", "user": profile})
        except Exception:
            logger.exception(f"Profile lookup failed for user {user_id}")
            return server_error()
