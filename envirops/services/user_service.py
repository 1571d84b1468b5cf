"""Staff users (gestores)."""
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from envirops.exceptions import ConflictError
from envirops.models import User
from envirops.services import records

logger = logging.getLogger(__name__)

USER_FIELDS = ('name', 'email', 'position', 'department', 'role')


def _normalize_email(data: Dict[str, Any]) -> None:
    if data.get('email'):
        data['email'] = data['email'].strip().lower()


def _ensure_email_free(email: str, session: Session, exclude_id: int = None) -> None:
    query = session.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise ConflictError(f'El email {email} ya está registrado')


def create_user(data: Dict[str, Any], session: Session) -> User:
    """
    Create a staff user.

    The password (optional) is stored as a scrypt hash only.
    """
    data = dict(data)
    _normalize_email(data)
    _ensure_email_free(data['email'], session)

    user = User()
    records.apply_fields(user, data, USER_FIELDS)
    if data.get('password'):
        user.set_password(data['password'])
    session.add(user)
    records.commit(session, f"user {user.email}", f"El email {user.email} ya está registrado")
    logger.info(f"User created: {user.email} ({user.role})")
    return user


def update_user(user_id: int, data: Dict[str, Any], session: Session) -> User:
    data = dict(data)
    _normalize_email(data)
    user = records.get_active(User, user_id, session, 'Usuario')
    if data.get('email'):
        _ensure_email_free(data['email'], session, exclude_id=user_id)

    records.apply_fields(user, data, USER_FIELDS)
    if data.get('password'):
        user.set_password(data['password'])
    records.commit(session, f"user {user_id}", f"El email {data.get('email')} ya está registrado")
    return user
