"""Persona CRUD over the persona table; one statement per operation."""

import logging
from typing import NoReturn

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import sessionmaker

from app.core.database import session_scope
from app.core.errors import ValidationError
from app.models import Persona
from app.models.persona import utcnow
from app.schemas.persona import (
    UPDATABLE_FIELDS,
    PersonaCreate,
    PersonaRecord,
    PersonaUpdate,
)

logger = logging.getLogger(__name__)


class PersonaService:
    """Create, read, partially update and delete personas."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def list_all(self) -> list[PersonaRecord]:
        """All personas in natural store order."""
        with session_scope(self._session_factory) as session:
            rows = session.scalars(select(Persona)).all()
            return [PersonaRecord.model_validate(r) for r in rows]

    def get(self, persona_id: int) -> PersonaRecord | None:
        """Persona by id, or None when no row matches."""
        with session_scope(self._session_factory) as session:
            row = session.get(Persona, persona_id)
            return PersonaRecord.model_validate(row) if row is not None else None

    def create(self, data: PersonaCreate) -> PersonaRecord:
        """Insert a persona and return the stored row with its timestamps."""
        if data.user_id is None:
            raise ValidationError("user_id is required")
        if not data.name or not data.name.strip():
            raise ValidationError("name is required")
        with session_scope(self._session_factory) as session:
            row = Persona(**data.model_dump())
            session.add(row)
            session.flush()
            record = PersonaRecord.model_validate(row)
        logger.info("Created persona", extra={"persona_id": record.id, "user_id": record.user_id})
        return record

    def update(self, persona_id: int, changes: PersonaUpdate) -> PersonaRecord | None:
        """
        Partially update a persona and refresh last_updated.

        Each column is set to COALESCE(new value, current value), so fields
        left as None keep what is stored. Returns None when the id does not
        exist; nothing is written in that case.
        """
        values = {
            field: func.coalesce(getattr(changes, field), getattr(Persona, field))
            for field in UPDATABLE_FIELDS
        }
        values["last_updated"] = utcnow()
        stmt = (
            update(Persona)
            .where(Persona.id == persona_id)
            .values(values)
            .returning(Persona)
            .execution_options(synchronize_session=False)
        )
        with session_scope(self._session_factory) as session:
            row = session.scalars(stmt).first()
            if row is None:
                logger.info("Persona update matched no row", extra={"persona_id": persona_id})
                return None
            record = PersonaRecord.model_validate(row)
        logger.info("Updated persona", extra={"persona_id": persona_id})
        return record

    def delete(self, persona_id: int) -> bool:
        """Delete a persona. Succeeds whether or not the row existed."""
        with session_scope(self._session_factory) as session:
            result = session.execute(
                delete(Persona)
                .where(Persona.id == persona_id)
                .execution_options(synchronize_session=False)
            )
        logger.info(
            "Deleted persona",
            extra={"persona_id": persona_id, "rows_deleted": result.rowcount},
        )
        return True

    def delete_all(self) -> NoReturn:
        """Bulk delete is not offered; always raises NotImplementedError."""
        raise NotImplementedError("Deleting all personas is not supported")
