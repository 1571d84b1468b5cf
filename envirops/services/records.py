"""Shared persistence helpers for soft-deletable entities."""
import logging
from typing import Any, Dict, Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from envirops.exceptions import NotFoundError, ConflictError, TransactionError
from envirops.services.cache_service import invalidate_dashboard

logger = logging.getLogger(__name__)


def active_query(model, session: Session):
    """Query over rows that are not soft-deleted."""
    return session.query(model).filter(model.deleted_at.is_(None))


def list_active(model, session: Session):
    """Non-deleted rows, newest first."""
    return active_query(model, session).order_by(model.created_at.desc(), model.id.desc()).all()


def get_active(model, entity_id: int, session: Session, label: str = None):
    """
    Fetch a visible row by id.

    Raises:
        NotFoundError: unknown id or soft-deleted row
    """
    entity = active_query(model, session).filter(model.id == entity_id).first()
    if entity is None:
        raise NotFoundError(f'{label or model.__name__} {entity_id} no encontrado')
    return entity


def apply_fields(entity, data: Dict[str, Any], fields: Iterable[str]) -> None:
    """Copy the keys of ``data`` that belong to ``fields`` onto the entity."""
    for field in fields:
        if field in data:
            setattr(entity, field, data[field])


def commit(session: Session, what: str, conflict_message: str = None) -> None:
    """
    Commit the unit of work; roll back on failure.

    Raises:
        ConflictError: unique constraint violated (when ``conflict_message`` is given)
        TransactionError: any other database error
    """
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Integrity error saving {what}: {e.orig}")
        if conflict_message:
            raise ConflictError(conflict_message) from e
        raise TransactionError() from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error saving {what}: {e}")
        raise TransactionError() from e
    invalidate_dashboard()


def soft_delete(model, entity_id: int, session: Session, label: str = None) -> None:
    """Stamp deleted_at on a visible row; the row stays in storage."""
    entity = get_active(model, entity_id, session, label)
    entity.mark_deleted()
    commit(session, f"{model.__name__} {entity_id}")
    logger.info(f"{model.__name__} {entity_id} soft-deleted")
