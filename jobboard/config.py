# config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


def _allowed_origins() -> list:
    origins = [
        "http://localhost:5173",
        "https://getresumic.vercel.app",
        "https://resumic-public-frontend.vercel.app",
        "https://www.channlr.com",
    ]
    if os.getenv("FRONTEND_URL"):
        origins.append(os.getenv("FRONTEND_URL").strip())
    extra = os.getenv("ALLOWED_ORIGINS", "")
    origins.extend(o.strip() for o in extra.split(",") if o.strip())
    return origins


class Config:
    """Settings read from the environment (and .env) once at import."""

    MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/resumicai")
    MONGODB_DB = os.getenv("MONGODB_DB", "")

    SUPABASE_URL = os.getenv("SUPABASE_URL")
    # Service role key first, anon key as fallback
    SUPABASE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")

    CORS_ORIGINS = _allowed_origins()
    PORT = _env_int("PORT", 5001)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Opt-in: 400 responses carry pydantic error detail
    JOB_VALIDATION_DETAILS = _env_flag("JOB_VALIDATION_DETAILS")
    JOBS_DEFAULT_LIMIT = _env_int("JOBS_DEFAULT_LIMIT", 3)
    JOBS_MAX_LIMIT = _env_int("JOBS_MAX_LIMIT", 100)
    CREATE_INDEXES = _env_flag("CREATE_INDEXES", True)
