"""Credential store: users, their password hashes and session tokens.

Token rows are inserted and deleted one statement at a time so concurrent
logins for the same user never overwrite each other.
"""
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tasktracker.errors import ValidationError
from tasktracker.models.user import User, UserToken
from tasktracker.utils.auth import hash_password
from tasktracker.validation import id_in_range


def get_user(db: Session, user_id: int) -> Optional[User]:
    if not id_in_range(user_id):
        return None
    return db.get(User, user_id)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def set_password(user: User, plain: str) -> None:
    """Store the hash of ``plain``. Called only when the password changes."""
    try:
        user.password = hash_password(plain)
    except ValueError as e:
        raise ValidationError(str(e), fields=["password"])


def create_user(db: Session, name: str, email: str, password: str, age: int = 0) -> User:
    if email_taken(db, email):
        raise ValidationError("Email already exists", fields=["email"])
    user = User(name=name, email=email, age=age)
    set_password(user, password)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent signup for the same address
        db.rollback()
        raise ValidationError("Email already exists", fields=["email"])
    db.refresh(user)
    return user


def save_user(db: Session, user: User) -> User:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Email already exists", fields=["email"])
    db.refresh(user)
    return user


def add_token(db: Session, user: User, token: str) -> UserToken:
    entry = UserToken(user_id=user.id, token=token)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def find_token(db: Session, user_id: int, token: str) -> Optional[UserToken]:
    return (
        db.query(UserToken)
        .filter(UserToken.user_id == user_id, UserToken.token == token)
        .first()
    )


def remove_token(db: Session, user: User, token: str) -> int:
    removed = (
        db.query(UserToken)
        .filter(UserToken.user_id == user.id, UserToken.token == token)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed


def clear_tokens(db: Session, user: User) -> int:
    removed = (
        db.query(UserToken)
        .filter(UserToken.user_id == user.id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed
