import os

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")

# Empty or unset means tokens never expire; they are only revoked through
# the owner's token list.
_expire = os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "").strip()
ACCESS_TOKEN_EXPIRE_MINUTES = float(_expire) if _expire else None

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./tasktracker.db")

SENDGRID_API_KEY = os.environ.get("SENDGRID_API_KEY", "")
EMAIL_FROM = os.environ.get("EMAIL_FROM", "no-reply@tasktracker.local")

AVATAR_MAX_BYTES = int(os.environ.get("AVATAR_MAX_BYTES", 1_000_000))

PORT = int(os.environ.get("PORT", 8000))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
