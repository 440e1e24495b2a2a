"""Schemas for stored uploads."""

from pydantic import BaseModel, Field


class StoredFile(BaseModel):
    """A file written by the upload store."""

    key: str = Field(..., description="Generated storage key (file name on disk).")
    filename: str = Field(..., description="Original client-supplied file name.")
    url: str = Field(..., description="Public URL the file is served from.")
    size: int = Field(..., ge=0, description="Bytes written.")
