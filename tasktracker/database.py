from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from tasktracker.config import DATABASE_URL

_is_sqlite = DATABASE_URL.startswith("sqlite")

# request handlers run on FastAPI's thread pool, so sqlite connections must
# be usable from threads other than the one that opened them
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    pool_pre_ping=True,
)

if _is_sqlite:
    # tasks.owner_id and user_tokens.user_id rely on enforced foreign keys,
    # which sqlite leaves off unless asked per connection
    @event.listens_for(engine, "connect")
    def _enable_sqlite_fks(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """One ORM session per request, shared by the guard and the handler."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
