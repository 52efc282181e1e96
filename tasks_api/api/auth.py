"""Registration, JWT login, and the get_current_user dependency."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tasks_api.core.database import DocumentStore, get_store
from tasks_api.core.errors import AuthError, ConflictError, StoreError
from tasks_api.core.security import create_access_token, decode_access_token
from tasks_api.models import public_user
from tasks_api.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserOut,
    UserProfile,
)
from tasks_api.schemas.common import ErrorResponse
from tasks_api.services.users import authenticate_user, get_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _auth_response(request: Request, user: dict) -> AuthResponse:
    token = create_access_token(
        sub=user["id"], email=user["email"], settings=request.app.state.settings
    )
    return AuthResponse(
        user=UserOut(id=user["id"], email=user["email"], name=user["name"]),
        token=token,
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the caller from its claims. Raises 401."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials, request.app.state.settings)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    sub = payload.get("sub")
    email = payload.get("email")
    if not sub or not isinstance(sub, str) or not isinstance(email, str):
        raise _unauthorized("Invalid token payload")
    return CurrentUser(id=sub, email=email)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(
    request: Request,
    body: RegisterRequest,
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AuthResponse:
    """Create an account and return the user with a JWT access token."""
    try:
        user = register_user(store, body.email, body.password, body.name)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except StoreError as e:
        logger.exception("Register failed: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error registering user",
        ) from e
    return _auth_response(request, user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(
    request: Request,
    body: LoginRequest,
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns the user and a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        user = authenticate_user(store, body.email, body.password)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message) from e
    except StoreError as e:
        logger.exception("Login failed: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error logging in",
        ) from e
    return _auth_response(request, user)


@router.get(
    "/me",
    response_model=UserProfile,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> dict:
    """Return the caller's stored profile without the password hash."""
    try:
        user = get_user(store, current_user.id)
    except StoreError as e:
        logger.exception("Fetching user %s failed: %s", current_user.id, e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching user data",
        ) from e
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return public_user(user)
