"""Pydantic schemas for persona create, partial update and read."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

# Free-text columns that a partial update may change; absent values keep the stored one.
UPDATABLE_FIELDS: tuple[str, ...] = (
    "name",
    "quote",
    "description",
    "attitudes",
    "pain_points",
    "jobs_needs",
    "activities",
    "avatar_url",
)


class PersonaCreate(BaseModel):
    """New persona. user_id and name are mandatory; everything else is nullable."""

    user_id: int | None = None
    name: str | None = Field(default=None, max_length=255)
    quote: str | None = None
    description: str | None = None
    attitudes: str | None = None
    pain_points: str | None = None
    jobs_needs: str | None = None
    activities: str | None = None
    avatar_url: str | None = Field(default=None, max_length=2048)


class PersonaUpdate(BaseModel):
    """Partial update: None means "leave unchanged"."""

    name: str | None = Field(default=None, max_length=255)
    quote: str | None = None
    description: str | None = None
    attitudes: str | None = None
    pain_points: str | None = None
    jobs_needs: str | None = None
    activities: str | None = None
    avatar_url: str | None = Field(default=None, max_length=2048)


class PersonaRecord(BaseModel):
    """Persona row as stored."""

    id: int
    user_id: int
    name: str
    quote: str | None = None
    description: str | None = None
    attitudes: str | None = None
    pain_points: str | None = None
    jobs_needs: str | None = None
    activities: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    last_updated: datetime

    class Config:
        from_attributes = True

    @field_validator("created_at", "last_updated")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive timestamps; stored values are always UTC.
        return v.replace(tzinfo=UTC) if v.tzinfo is None else v
