"""GraphQL object types and their conversion from service records."""

from datetime import datetime
from typing import Optional

import strawberry

from app.schemas.auth import AuthResult, UserPublic
from app.schemas.persona import PersonaRecord
from app.schemas.upload import StoredFile


def _timestamp(value: datetime | None) -> Optional[str]:
    return value.isoformat() if value is not None else None


@strawberry.type(name="File")
class UploadedFile:
    url: str
    filename: str

    @classmethod
    def from_stored(cls, stored: StoredFile) -> "UploadedFile":
        return cls(url=stored.url, filename=stored.filename)


@strawberry.type(description="A user account; the password hash is never exposed.")
class User:
    id: strawberry.ID
    name: str
    email: str

    @classmethod
    def from_record(cls, user: UserPublic) -> "User":
        return cls(id=strawberry.ID(str(user.id)), name=user.name, email=user.email)


@strawberry.type
class Persona:
    id: strawberry.ID
    user_id: int
    name: str
    quote: Optional[str] = None
    description: Optional[str] = None
    attitudes: Optional[str] = None
    pain_points: Optional[str] = None
    jobs_needs: Optional[str] = None
    activities: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[str] = None
    last_updated: Optional[str] = None

    @classmethod
    def from_record(cls, record: PersonaRecord) -> "Persona":
        return cls(
            id=strawberry.ID(str(record.id)),
            user_id=record.user_id,
            name=record.name,
            quote=record.quote,
            description=record.description,
            attitudes=record.attitudes,
            pain_points=record.pain_points,
            jobs_needs=record.jobs_needs,
            activities=record.activities,
            avatar_url=record.avatar_url,
            created_at=_timestamp(record.created_at),
            last_updated=_timestamp(record.last_updated),
        )


@strawberry.type
class AuthPayload:
    token: str
    user: User

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthPayload":
        return cls(token=result.token, user=User.from_record(result.user))
