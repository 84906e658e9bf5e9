from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from tasktracker.database import get_db
from tasktracker.services.guard import AuthContext, authenticate


def get_auth(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)) -> AuthContext:
    """Guard for every route that needs a logged-in owner."""
    return authenticate(db, authorization)
