import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_PROFILES_SOURCE = "data/college-profiles.json"
DEFAULT_CLOSING_RANKS_SOURCE = "data/closing-ranks-2025-phase1.json"


class Settings(BaseModel):
    profiles_source: str = DEFAULT_PROFILES_SOURCE
    closing_ranks_source: str = DEFAULT_CLOSING_RANKS_SOURCE
    top_n: int = 10
    http_timeout: float = 10.0
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    try:
        return int(value) if value else default
    except ValueError:
        logging.warning(f"Ignoring non-integer {name}={value!r}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    try:
        return float(value) if value else default
    except ValueError:
        logging.warning(f"Ignoring non-numeric {name}={value!r}")
        return default


def get_settings() -> Settings:
    """Read settings from the environment (and .env, loaded at import)."""
    return Settings(
        profiles_source=os.getenv("COLLEGE_PROFILES_SOURCE") or DEFAULT_PROFILES_SOURCE,
        closing_ranks_source=os.getenv("CLOSING_RANKS_SOURCE") or DEFAULT_CLOSING_RANKS_SOURCE,
        top_n=_env_int("ADVISOR_TOP_N", 10),
        http_timeout=_env_float("ADVISOR_HTTP_TIMEOUT", 10.0),
        log_level=(os.getenv("ADVISOR_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(levelname)s - %(name)s - %(message)s",
    )
