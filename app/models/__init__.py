"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.persona import Persona
from app.models.user import User

__all__ = ["Base", "Persona", "User"]
