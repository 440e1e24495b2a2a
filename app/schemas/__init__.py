"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResult,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    TokenIdentity,
    UserPublic,
)
from app.schemas.health import HealthResponse
from app.schemas.persona import PersonaCreate, PersonaRecord, PersonaUpdate
from app.schemas.upload import StoredFile

__all__ = [
    "AuthResult",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "PersonaCreate",
    "PersonaRecord",
    "PersonaUpdate",
    "SignupRequest",
    "StoredFile",
    "TokenIdentity",
    "UserPublic",
]
