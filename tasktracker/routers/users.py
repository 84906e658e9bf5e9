from fastapi import APIRouter, BackgroundTasks, Body, Depends, File, Response, UploadFile
from sqlalchemy.orm import Session
import tasktracker.config as cfg
from tasktracker.database import get_db
from tasktracker.emails.account import send_cancellation_email, send_welcome_email
from tasktracker.routers.deps import get_auth
from tasktracker.schemas.user import AuthOut, UserCreate, UserLogin, UserOut
from tasktracker.services import sessions
from tasktracker.services.guard import AuthContext

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=AuthOut, status_code=201)
def signup(data: UserCreate, background: BackgroundTasks, db: Session = Depends(get_db)):
    user, token = sessions.signup(db, data)
    background.add_task(send_welcome_email, user.email, user.name)
    return {"user": user, "token": token}


@router.post("/login", response_model=AuthOut)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user, token = sessions.login(db, data.email, data.password)
    return {"user": user, "token": token}


@router.post("/logout")
def logout(auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    sessions.logout(db, auth.user, auth.token)
    return {"detail": "logged out"}


@router.post("/logoutAll")
def logout_all(auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    sessions.logout_all(db, auth.user)
    return {"detail": "logged out of all sessions"}


@router.get("/me", response_model=UserOut)
def read_me(auth: AuthContext = Depends(get_auth)):
    return auth.user


@router.patch("/me", response_model=UserOut)
def update_me(payload: dict = Body(...), auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    return sessions.update_profile(db, auth.user, payload)


@router.delete("/me", response_model=UserOut)
def delete_me(background: BackgroundTasks, auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    # serialize before the row is gone
    profile = UserOut.model_validate(auth.user)
    sessions.delete_account(db, auth.user)
    background.add_task(send_cancellation_email, profile.email, profile.name)
    return profile


@router.post("/me/avatar")
def upload_avatar(avatar: UploadFile = File(...), auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    # read one byte past the limit so oversized uploads are detected without
    # buffering the whole file
    data = avatar.file.read(cfg.AVATAR_MAX_BYTES + 1)
    sessions.set_avatar(db, auth.user, avatar.filename, data, cfg.AVATAR_MAX_BYTES)
    return {"detail": "avatar uploaded"}


@router.delete("/me/avatar")
def delete_avatar(auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    sessions.clear_avatar(db, auth.user)
    return {"detail": "avatar removed"}


@router.get("/{user_id}/avatar")
def read_avatar(user_id: int, db: Session = Depends(get_db)):
    data, content_type = sessions.get_avatar(db, user_id)
    return Response(content=data, media_type=content_type)
