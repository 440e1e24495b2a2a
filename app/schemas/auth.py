"""Request/response schemas for signup, login and session identity."""

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Signup body. Fields are optional here so missing ones map to 400, not 422."""

    name: str | None = Field(default=None, max_length=255, description="Display name")
    email: str | None = Field(default=None, max_length=255, description="Login email")
    password: str | None = Field(default=None, max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, max_length=255, description="Login email")
    password: str | None = Field(default=None, max_length=128, description="Password")


class UserPublic(BaseModel):
    """User as returned to clients (no password hash)."""

    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Response for POST /login."""

    message: str = Field(default="Login successful")
    user: UserPublic


class AuthResult(BaseModel):
    """Issued session token plus the authenticated user."""

    token: str = Field(..., description="JWT access token")
    user: UserPublic


class TokenIdentity(BaseModel):
    """Identity carried by a verified session token."""

    user_id: int
