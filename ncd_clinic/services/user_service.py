"""
User Service
Staff accounts shared by the auth routes and the CLI
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from ncd_clinic.extensions import db
from ncd_clinic.exceptions import DuplicateError, ValidationError
from ncd_clinic.models import User
from ncd_clinic.utils.normalize import empty_to_none

logger = logging.getLogger(__name__)

DEFAULT_ROLE = 'staff'


def create_user(username, password, full_name=None, role=None) -> User:
    username = empty_to_none(username)
    if not username or not password:
        raise ValidationError('Username and password are required')

    if User.query.filter_by(username=username).first():
        raise DuplicateError('Username already exists')

    user = User(
        username=username,
        full_name=empty_to_none(full_name) or username,
        role=empty_to_none(role) or DEFAULT_ROLE,
    )
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateError('Username already exists')

    logger.info(f"Created user {user.username} ({user.role})")
    return user


def authenticate(username, password) -> Optional[User]:
    """Return the user when the credentials match, otherwise None"""
    if not username or not password:
        raise ValidationError('Username and password are required')
    user = User.query.filter_by(username=username).first()
    if not user or not user.check_password(password):
        return None
    return user
