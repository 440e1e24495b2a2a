"""FastAPI dependency providers for the services (overridable in tests)."""

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.services.auth import AuthService
from app.services.personas import PersonaService
from app.services.uploads import UploadStore


def get_auth_service() -> AuthService:
    return AuthService(SessionLocal)


def get_persona_service() -> PersonaService:
    return PersonaService(SessionLocal)


def get_upload_store() -> UploadStore:
    settings = get_settings()
    return UploadStore(
        settings.UPLOAD_DIR,
        base_url=settings.PUBLIC_BASE_URL,
        url_prefix=settings.UPLOAD_URL_PREFIX,
        max_bytes=settings.UPLOAD_MAX_FILE_BYTES,
    )
