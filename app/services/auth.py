"""Signup, login and session-token verification over the users table."""

import logging

import jwt
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from app.core.database import session_scope
from app.core.errors import InvalidCredentialsError, NotFoundError, ValidationError
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.models import User
from app.schemas.auth import AuthResult, TokenIdentity, UserPublic

logger = logging.getLogger(__name__)


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


class AuthService:
    """Credential store access plus token issuance and verification."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def signup(self, name: str | None, email: str | None, password: str | None) -> AuthResult:
        """
        Store a new user with a bcrypt-hashed password and issue a session token.

        Raises ValidationError when a field is empty and StoreError when the
        insert fails (duplicate email, unreachable database).
        """
        _require(name=name, email=email, password=password)
        hashed = hash_password(password)
        with session_scope(self._session_factory) as session:
            user = User(name=name.strip(), email=email.strip(), password_hash=hashed)
            session.add(user)
            session.flush()
            public = UserPublic.model_validate(user)
        logger.info("User signed up", extra={"user_id": public.id})
        return AuthResult(token=create_access_token(public.id), user=public)

    def login(self, email: str | None, password: str | None) -> AuthResult:
        """
        Check email and password against the stored hash and issue a session token.

        Raises NotFoundError for an unknown email and InvalidCredentialsError
        for a wrong password; no token is issued in either case.
        """
        _require(email=email, password=password)
        with session_scope(self._session_factory) as session:
            user = session.scalars(select(User).where(User.email == email.strip())).first()
            if user is None:
                logger.info("Login failed: unknown email")
                raise NotFoundError("User not found")
            if not verify_password(password, user.password_hash):
                logger.info("Login failed: password mismatch", extra={"user_id": user.id})
                raise InvalidCredentialsError("Incorrect password")
            public = UserPublic.model_validate(user)
        logger.info("User logged in", extra={"user_id": public.id})
        return AuthResult(token=create_access_token(public.id), user=public)

    def verify_token(self, token: str | None) -> TokenIdentity | None:
        """
        Return the identity carried by a valid token, or None.

        Missing, malformed, expired or wrongly signed tokens are logged and
        treated as unauthenticated; this never raises.
        """
        if not token:
            return None
        try:
            payload = decode_access_token(token)
        except jwt.PyJWTError as e:
            logger.warning("Invalid token: %s", e)
            return None
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            logger.warning("Invalid token payload: missing or non-numeric sub")
            return None
        return TokenIdentity(user_id=user_id)

    def list_users(self) -> list[UserPublic]:
        with session_scope(self._session_factory) as session:
            users = session.scalars(select(User)).all()
            return [UserPublic.model_validate(u) for u in users]

    def get_user(self, user_id: int) -> UserPublic | None:
        with session_scope(self._session_factory) as session:
            user = session.get(User, user_id)
            return UserPublic.model_validate(user) if user is not None else None
