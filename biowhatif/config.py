"""Runtime configuration, read once from the environment."""

import logging
import os
from functools import lru_cache

from pydantic import BaseModel

logger = logging.getLogger(__name__)

API_KEY_VARIABLES = ("API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _first_env(names: tuple[str, ...]) -> str:
    for name in names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


def _env_number(name: str, default, cast=float):
    """Read a numeric variable; a malformed value logs a warning and keeps the default."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a valid %s, using %s", name, raw, cast.__name__, default)
        return default


def _env_log_level() -> str:
    level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("Ignoring LOG_LEVEL=%r, using INFO", level)
        return "INFO"
    return level


class Settings(BaseModel):
    api_key: str = ""
    gemini_model: str = "gemini-2.5-flash-lite"
    temperature: float = 0.3
    top_p: float = 0.95
    max_output_tokens: int = 8192

    structure_url_template: str = "https://files.rcsb.org/view/{pdb_id}.pdb"
    structure_timeout: float = 20.0
    structure_cache_seconds: int = 86400

    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.environ.get("CORS_ORIGINS", "*")
        return cls(
            api_key=_first_env(API_KEY_VARIABLES),
            gemini_model=os.environ.get("GEMINI_MODEL", "gemini-2.5-flash-lite"),
            temperature=_env_number("GEMINI_TEMPERATURE", 0.3),
            top_p=_env_number("GEMINI_TOP_P", 0.95),
            max_output_tokens=_env_number("GEMINI_MAX_OUTPUT_TOKENS", 8192, int),
            structure_url_template=os.environ.get(
                "PDB_FILE_URL", "https://files.rcsb.org/view/{pdb_id}.pdb"
            ),
            structure_timeout=_env_number("PDB_TIMEOUT", 20.0),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=_env_log_level(),
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
