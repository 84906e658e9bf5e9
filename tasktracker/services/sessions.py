"""Account lifecycle: signup, login/logout and profile changes.

A session is a token row in the owner's token list. Logging out deletes
the row; the token's signature stays valid but the guard no longer accepts
it.
"""
import logging
from typing import Tuple
from sqlalchemy.orm import Session
from tasktracker.errors import InvalidCredentialsError, NotFoundError, ValidationError
from tasktracker.models.task import Task
from tasktracker.models.user import User
from tasktracker.schemas.user import UserCreate, UserUpdate
from tasktracker.services import credentials
from tasktracker.services.updates import parse_update
from tasktracker.utils.auth import create_token, verify_password
from tasktracker.validation import avatar_content_type, avatar_problem

logger = logging.getLogger(__name__)

USER_UPDATE_FIELDS = frozenset({"name", "email", "password", "age"})


def _start_session(db: Session, user: User) -> str:
    token = create_token(user.id)
    credentials.add_token(db, user, token)
    return token


def signup(db: Session, data: UserCreate) -> Tuple[User, str]:
    user = credentials.create_user(db, data.name, data.email, data.password, data.age)
    token = _start_session(db, user)
    logger.info("User %s signed up", user.id)
    return user, token


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    user = credentials.find_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        logger.info("Failed login for %s", email)
        raise InvalidCredentialsError()
    token = _start_session(db, user)
    logger.info("User %s logged in (%d active sessions)", user.id, len(user.tokens))
    return user, token


def logout(db: Session, user: User, current_token: str) -> None:
    """End the session for ``current_token`` only."""
    credentials.remove_token(db, user, current_token)
    logger.info("User %s logged out", user.id)


def logout_all(db: Session, user: User) -> None:
    removed = credentials.clear_tokens(db, user)
    logger.info("User %s logged out of %d sessions", user.id, removed)


def update_profile(db: Session, user: User, payload) -> User:
    """Apply an allow-listed partial update.

    A new password is rehashed here. Existing sessions stay valid after a
    password change.
    """
    changes = parse_update(UserUpdate, payload, USER_UPDATE_FIELDS)
    if "email" in changes and credentials.email_taken(db, changes["email"], exclude_id=user.id):
        raise ValidationError("Email already exists", fields=["email"])
    password = changes.pop("password", None)
    for field, value in changes.items():
        setattr(user, field, value)
    if password is not None:
        credentials.set_password(user, password)
    return credentials.save_user(db, user)


def delete_account(db: Session, user: User) -> None:
    """Delete the user's tasks, then the user.

    Two separate commits, not one transaction: a failure between them
    leaves the account in place with its tasks already gone.
    """
    user_id = user.id
    deleted = db.query(Task).filter(Task.owner_id == user_id).delete(synchronize_session=False)
    db.commit()
    db.delete(user)
    db.commit()
    logger.info("User %s deleted along with %d tasks", user_id, deleted)


def set_avatar(db: Session, user: User, filename: str, data: bytes, max_bytes: int) -> None:
    problem = avatar_problem(filename, len(data), max_bytes)
    if problem:
        raise ValidationError(problem, fields=["avatar"])
    user.avatar = data
    user.avatar_content_type = avatar_content_type(filename)
    db.commit()


def clear_avatar(db: Session, user: User) -> None:
    user.avatar = None
    user.avatar_content_type = None
    db.commit()


def get_avatar(db: Session, user_id: int) -> Tuple[bytes, str]:
    user = credentials.get_user(db, user_id)
    if not user or not user.avatar:
        raise NotFoundError("Avatar")
    return user.avatar, user.avatar_content_type or "image/png"
