import os

import pytz
from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./scheduling.db")

SCHEDULING_TIMEZONE = os.getenv("SCHEDULING_TIMEZONE", "Asia/Kolkata")
DEFAULT_SLOT_DURATION_MINUTES = int(os.getenv("DEFAULT_SLOT_DURATION_MINUTES", "30"))
MAX_APPOINTMENT_NOTES_LENGTH = int(os.getenv("MAX_APPOINTMENT_NOTES_LENGTH", "600"))
MAX_APPOINTMENT_DURATION_MINUTES = int(os.getenv("MAX_APPOINTMENT_DURATION_MINUTES", "1440"))

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), default=["*"])
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SEED_DEFAULT_DOCTORS = _get_bool(os.getenv("SEED_DEFAULT_DOCTORS"), default=True)


def get_scheduling_timezone():
    return pytz.timezone(SCHEDULING_TIMEZONE)


def validate_runtime_config() -> None:
    try:
        get_scheduling_timezone()
    except pytz.UnknownTimeZoneError as exc:
        raise RuntimeError(f"SCHEDULING_TIMEZONE '{SCHEDULING_TIMEZONE}' is not a known timezone.") from exc
    if DEFAULT_SLOT_DURATION_MINUTES <= 0:
        raise RuntimeError("DEFAULT_SLOT_DURATION_MINUTES must be a positive integer.")
