from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the repo root .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db")
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRES_IN_MINUTES", "1440"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

TOKEN_COOKIE_NAME = "token"
TOKEN_HEADER_NAME = "x-auth-token"
COOKIE_SECURE = _env_bool("COOKIE_SECURE", True)

DEFAULT_TASK_RANGE_DAYS = 7

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG_ERRORS = _env_bool("DEBUG_ERRORS", False)

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:5173")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]
