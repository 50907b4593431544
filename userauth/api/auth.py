"""Authentication and profile API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from userauth.api.dependencies import (
    RequestBody,
    get_auth_controller,
    get_current_identity,
    get_request_body,
)
from userauth.services.auth_controller import AuthController

router = APIRouter(prefix="/api/v1", tags=["auth"])


@router.post("/register", status_code=201)
async def register(
    body: Annotated[RequestBody, Depends(get_request_body)],
    controller: Annotated[AuthController, Depends(get_auth_controller)],
):
    """Register a new user with a profile image."""
    return await controller.register(body.fields, body.image)


@router.post("/login")
async def login(
    body: Annotated[RequestBody, Depends(get_request_body)],
    controller: Annotated[AuthController, Depends(get_auth_controller)],
):
    """Login with email and password."""
    return await controller.login(body.fields)


@router.get("/check-auth")
async def check_auth(
    identity: Annotated[dict[str, Any], Depends(get_current_identity)],
    controller: Annotated[AuthController, Depends(get_auth_controller)],
):
    """Get the user behind the bearer token."""
    return await controller.check_auth(identity)


@router.patch("/profile/{user_id}", status_code=201)
async def update_profile(
    user_id: str,
    body: Annotated[RequestBody, Depends(get_request_body)],
    controller: Annotated[AuthController, Depends(get_auth_controller)],
):
    """Replace a user's profile, password and image."""
    return await controller.update_profile(user_id, body.fields, body.image)


@router.get("/profile/{user_id}")
async def get_profile(
    user_id: str,
    controller: Annotated[AuthController, Depends(get_auth_controller)],
):
    """Get a user's public profile."""
    return await controller.get_profile(user_id)
