"""ORM model for personas owned by users."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.models.base import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class Persona(Base):
    """
    A user persona: name, free-text profile sections and an avatar URL.

    user_id is stored as given; the owning user is not checked.
    """

    __tablename__ = "persona"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quote = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    attitudes = Column(Text, nullable=True)
    pain_points = Column(Text, nullable=True)
    jobs_needs = Column(Text, nullable=True)
    activities = Column(Text, nullable=True)
    avatar_url = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    last_updated = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
