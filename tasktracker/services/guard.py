"""Resolve a bearer token to the acting user and their session entry."""
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session
from tasktracker.errors import InvalidTokenError, UnauthenticatedError
from tasktracker.models.user import User, UserToken
from tasktracker.services import credentials
from tasktracker.utils.auth import decode_token


@dataclass
class AuthContext:
    user: User
    session: UserToken

    @property
    def token(self) -> str:
        return self.session.token


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer ...`` header value."""
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def authenticate(db: Session, authorization: Optional[str]) -> AuthContext:
    """Signature, then user, then the user's token list.

    A valid signature is not enough: a token removed by logout or logoutAll
    is rejected here the same way as a forged one.
    """
    token = extract_bearer(authorization)
    if not token:
        raise UnauthenticatedError()
    try:
        user_id = decode_token(token)
    except InvalidTokenError as e:
        raise UnauthenticatedError(e.message)
    user = credentials.get_user(db, user_id)
    if user is None:
        raise UnauthenticatedError()
    entry = credentials.find_token(db, user.id, token)
    if entry is None:
        raise UnauthenticatedError()
    return AuthContext(user=user, session=entry)
