import uuid
from datetime import datetime, timedelta, UTC
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from tasktracker.config import SECRET_KEY, ALGORITHM
from tasktracker.errors import ExpiredTokenError, InvalidTokenError
from tasktracker.validation import PASSWORD_MAX_BYTES

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """bcrypt hash for a new or changed account password.

    The schemas already cap passwords at 72 bytes; this repeats the check
    so a caller that skips them gets a ValueError instead of a silently
    truncated hash.
    """
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time check of a login attempt against the stored hash.

    An over-long attempt counts as a mismatch so login can answer with the
    usual "Unable to login".
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_token(user_id: int) -> str:
    """Mint a signed session token for ``user_id``.

    ``jti`` makes every token unique even when one user logs in twice within
    the same second. ``exp`` is only added when an expiry is configured.
    """
    # read expiry at call-time so tests (and runtime overrides) that modify
    # tasktracker.config.ACCESS_TOKEN_EXPIRE_MINUTES take effect immediately
    import tasktracker.config as _cfg
    now = datetime.now(UTC)
    data = {"sub": str(user_id), "iat": int(now.timestamp()), "jti": uuid.uuid4().hex}
    if _cfg.ACCESS_TOKEN_EXPIRE_MINUTES is not None:
        expire = now + timedelta(minutes=_cfg.ACCESS_TOKEN_EXPIRE_MINUTES)
        data["exp"] = int(expire.timestamp())  # JWT spec uses Unix timestamp
    return jwt.encode(data, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> int:
    """Check the signature and return the user id the token was issued for.

    This says nothing about whether the session is still active; that is the
    owner's token list's call.
    """
    try:
        # jwt.decode validates exp automatically when present
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise ExpiredTokenError()
    except JWTError:
        raise InvalidTokenError()
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub.isdigit():
        raise InvalidTokenError("Invalid token: missing user")
    return int(sub)
