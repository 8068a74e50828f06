import os
import logging
from enum import Enum
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from songcatalog.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class MatchPolicy(str, Enum):
    STRICT = "strict"
    LOOSE = "loose"


def _is_enabled(env_var: str, default: bool = True) -> bool:
    """Check if a feature is enabled via environment variable."""
    value = os.getenv(env_var, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def _float_env(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{env_var} must be a number, got {raw!r}")


def _int_env(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{env_var} must be an integer, got {raw!r}")


class Settings(BaseModel):
    database_url: Optional[str] = None
    genius_api_token: Optional[str] = None
    genius_api_url: str = "https://api.genius.com"
    search_provider: str = "genius"
    match_policy: MatchPolicy = MatchPolicy.STRICT
    provider_timeout: float = 15.0
    store_timeout: float = 10.0
    db_pool_min: int = 1
    db_pool_max: int = 10
    frontend_index: str = "../front-end/index.html"
    log_level: str = "INFO"
    enable_docs: bool = True

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Build settings from the process environment.

        A ``.env`` file in the working directory is loaded first when present;
        variables already set in the environment win over it.
        """
        if dotenv and load_dotenv():
            logger.debug("Loaded environment from .env")

        raw_policy = os.getenv("MATCH_POLICY", MatchPolicy.STRICT.value).strip().lower()
        try:
            policy = MatchPolicy(raw_policy)
        except ValueError:
            raise ConfigurationError(
                f"MATCH_POLICY must be one of {[p.value for p in MatchPolicy]}, got {raw_policy!r}"
            )

        return cls(
            database_url=os.getenv("DATABASE_URL"),
            genius_api_token=os.getenv("GENIUS_API_TOKEN"),
            genius_api_url=os.getenv("GENIUS_API_URL", "https://api.genius.com").rstrip("/"),
            search_provider=os.getenv("SEARCH_PROVIDER", "genius").strip().lower(),
            match_policy=policy,
            provider_timeout=_float_env("PROVIDER_TIMEOUT", 15.0),
            store_timeout=_float_env("STORE_TIMEOUT", 10.0),
            db_pool_min=_int_env("DB_POOL_MIN", 1),
            db_pool_max=_int_env("DB_POOL_MAX", 10),
            frontend_index=os.getenv("FRONTEND_INDEX", "../front-end/index.html"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            enable_docs=_is_enabled("ENABLE_DOCS"),
        )

    def require(self, *names: str) -> None:
        """Raise ConfigurationError naming the first unset setting."""
        for name in names:
            if not getattr(self, name):
                raise ConfigurationError(f"{name.upper()} is not set in environment variables")
