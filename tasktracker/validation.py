"""Field rules as plain predicates.

Each check returns an error message, or ``None`` when the value is
acceptable. The pydantic schemas call these and raise on a message; the
services call them directly where they validate outside a schema.
"""
from typing import Optional

PASSWORD_MIN_LENGTH = 7
# bcrypt silently ignores everything past 72 bytes
PASSWORD_MAX_BYTES = 72

AVATAR_EXTENSIONS = (".jpg", ".jpeg", ".png")

# largest value a 64-bit signed INTEGER column can hold
MAX_DB_INT = 2**63 - 1


def name_problem(value: str) -> Optional[str]:
    if not value.strip():
        return "name cannot be empty"
    return None


def password_problem(value: str) -> Optional[str]:
    value = value.strip()
    if len(value) < PASSWORD_MIN_LENGTH:
        return f"password must be at least {PASSWORD_MIN_LENGTH} characters"
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return "password too long: must be at most 72 bytes when UTF-8 encoded"
    if "password" in value.lower():
        return 'password cannot contain the word "password"'
    return None


def age_problem(value: int) -> Optional[str]:
    if value < 0:
        return "age must be a positive number"
    return None


def description_problem(value: str) -> Optional[str]:
    if not value.strip():
        return "description cannot be empty"
    return None


def avatar_problem(filename: Optional[str], size: int, max_bytes: int) -> Optional[str]:
    if not filename or not filename.lower().endswith(AVATAR_EXTENSIONS):
        return "Please upload an image file (jpg, jpeg or png)"
    if size > max_bytes:
        return f"File too large: must be at most {max_bytes} bytes"
    return None


def avatar_content_type(filename: str) -> str:
    return "image/png" if filename.lower().endswith(".png") else "image/jpeg"


def id_in_range(value: int) -> bool:
    return 0 <= value <= MAX_DB_INT


def unknown_fields(payload, allowed) -> set:
    """Keys of ``payload`` that are not in ``allowed``."""
    return set(payload) - set(allowed)
