"""REST signup and login. Responses carry the public user projection only."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_auth_service
from app.core.config import get_settings
from app.core.errors import (
    InvalidCredentialsError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.schemas.auth import LoginRequest, LoginResponse, SignupRequest, UserPublic
from app.services.auth import AuthService

logger = logging.getLogger(__name__)
router = APIRouter()

GENERIC_LOGIN_FAILURE = "Invalid email or password"
GENERIC_SERVER_ERROR = "Internal server error"


def _store_failure(operation: str, e: StoreError) -> JSONResponse:
    """500 response; the driver message is only exposed outside prod."""
    logger.error("%s failed", operation, extra={"reason": e.message[:500]})
    detail = e.message if get_settings().APP_ENV == "dev" else GENERIC_SERVER_ERROR
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": detail},
    )


@router.post("/signup", response_model=UserPublic)
def signup(
    body: SignupRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic | JSONResponse:
    """Create a user account. The password is stored as a bcrypt hash."""
    try:
        result = auth.signup(body.name, body.email, body.password)
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": e.message},
        )
    except StoreError as e:
        return _store_failure("Signup", e)
    return result.user


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse | JSONResponse:
    """
    Check email and password.

    401 messages distinguish an unknown email from a wrong password unless
    AUTH_GENERIC_ERRORS is set.
    """
    if not body.email or not body.password:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Email and password are required"},
        )
    try:
        result = auth.login(body.email, body.password)
    except (NotFoundError, InvalidCredentialsError) as e:
        message = GENERIC_LOGIN_FAILURE if get_settings().AUTH_GENERIC_ERRORS else e.message
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": message},
        )
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": e.message},
        )
    except StoreError as e:
        return _store_failure("Login", e)
    return LoginResponse(message="Login successful", user=result.user)
