import os

# must be set before tasktracker.config is imported
os.environ["DATABASE_URL"] = "sqlite:///./test_tasktracker.db"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["SENDGRID_API_KEY"] = ""
os.environ.pop("ACCESS_TOKEN_EXPIRE_MINUTES", None)

import pytest
from fastapi.testclient import TestClient
from tasktracker.main import app
from tasktracker.database import SessionLocal, Base, engine
from tasktracker.models.task import Task
from tasktracker.schemas.task import TaskCreate
from tasktracker.schemas.user import UserCreate
from tasktracker.services import sessions
from tasktracker.services.tasks import create_task

USER_ONE = {"name": "Mike", "email": "mike@example.com", "password": "56what!!"}
USER_TWO = {"name": "Jess", "email": "jess@example.com", "password": "myhouse099@@"}


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_one(db):
    user, token = sessions.signup(db, UserCreate(**USER_ONE))
    return user, token


@pytest.fixture
def user_two(db):
    user, token = sessions.signup(db, UserCreate(**USER_TWO))
    return user, token


@pytest.fixture
def seeded_tasks(db, user_one, user_two):
    """Two tasks for user one (open, done) and one for user two."""
    one, _ = user_one
    two, _ = user_two
    task_one = create_task(db, one, TaskCreate(description="First task", completed=False))
    task_two = create_task(db, one, TaskCreate(description="Second task", completed=True))
    task_three = create_task(db, two, TaskCreate(description="Third task", completed=True))
    return task_one, task_two, task_three


def fetch_task(db, task_id):
    db.expire_all()
    return db.get(Task, task_id)
