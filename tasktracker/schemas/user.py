from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, field_validator
from tasktracker import validation


def _check(problem):
    if problem:
        raise ValueError(problem)


def _normalize_email(v):
    return v.strip().lower() if isinstance(v, str) else v


# stored trimmed and lower-cased so lookups are case-insensitive
Email = Annotated[EmailStr, BeforeValidator(_normalize_email)]


class UserCreate(BaseModel):
    name: str
    email: Email
    password: str
    age: int = 0

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        _check(validation.name_problem(v))
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_rules(cls, v: str) -> str:
        """Length, bcrypt's 72-byte ceiling and the banned-word check."""
        _check(validation.password_problem(v))
        return v.strip()

    @field_validator("age")
    @classmethod
    def age_not_negative(cls, v: int) -> int:
        _check(validation.age_problem(v))
        return v


class UserUpdate(BaseModel):
    """Partial profile update. Unknown keys are rejected before this runs.

    Fields left out keep their stored value; an explicit null is an error.
    """

    name: Optional[str] = None
    email: Optional[Email] = None
    password: Optional[str] = None
    age: Optional[int] = None

    @field_validator("email")
    @classmethod
    def email_not_null(cls, v):
        _check(v is None and "email may not be null")
        return v

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v):
        _check(v is None and "name may not be null")
        _check(validation.name_problem(v))
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_rules(cls, v):
        _check(v is None and "password may not be null")
        _check(validation.password_problem(v))
        return v.strip()

    @field_validator("age")
    @classmethod
    def age_not_negative(cls, v):
        _check(v is None and "age may not be null")
        _check(validation.age_problem(v))
        return v


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    age: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthOut(BaseModel):
    user: UserOut
    token: str
