"""Liveness endpoint reporting store and upload-directory status."""

import os
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_upload_store
from app.core.config import get_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse
from app.services.uploads import UploadStore

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    uploads: Annotated[UploadStore, Depends(get_upload_store)],
) -> HealthResponse:
    """Service status for load balancers: database reachability and upload storage."""
    directory = uploads.directory
    writable = directory.is_dir() and os.access(directory, os.W_OK)
    return HealthResponse(
        status="ok",
        environment=get_settings().APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        uploads="writable" if writable else "unavailable",
    )
