"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """New account: email, password and display name."""

    email: EmailStr = Field(..., description="Email (unique)")
    password: str = Field(..., min_length=6, max_length=128, description="Password")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class UserOut(BaseModel):
    """Public user fields returned with a token."""

    id: str
    email: str
    name: str


class AuthResponse(BaseModel):
    """User and JWT access token returned by register and login."""

    user: UserOut
    token: str = Field(..., description="JWT access token (send as Authorization: Bearer <token>)")


class UserProfile(BaseModel):
    """Stored user without the password hash (GET /auth/me)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    name: str
    created_at: str | None = Field(default=None, alias="createdAt")


class CurrentUser(BaseModel):
    """Authenticated caller (from the token claims) for dependency injection."""

    id: str
    email: str
