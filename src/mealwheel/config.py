"""Settings for the Mealwheel API, CLI and storage layer."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DOTENV_FILES = (Path(".env"), Path(".env.local"))

DEFAULT_ALLOWED_USERNAMES = ("kuato", "noodle", "father", "boodle", "louis")

# Settings field -> environment variable
ENV_VARS: Mapping[str, str] = {
    "database_path": "MEALWHEEL_DATABASE_PATH",
    "api_token": "MEALWHEEL_API_TOKEN",
    "allowed_usernames": "MEALWHEEL_ALLOWED_USERNAMES",
    "log_level": "MEALWHEEL_LOG_LEVEL",
    "log_format": "MEALWHEEL_LOG_FORMAT",
    "log_requests": "MEALWHEEL_LOG_REQUESTS",
}


class Settings(BaseModel):
    """Runtime settings; every field can be overridden through ``MEALWHEEL_*`` variables."""

    database_path: Path = Field(
        default=Path("./data/mealwheel.db"),
        description="SQLite file holding meals, rotation, household groups and checks.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Optional bearer token guarding the grocery endpoints.",
    )
    allowed_usernames: tuple[str, ...] = Field(
        default=DEFAULT_ALLOWED_USERNAMES,
        description="Usernames accepted in the X-User header.",
    )
    log_level: str = Field(default="INFO")
    log_format: Literal["plain", "json"] = Field(default="plain")
    log_requests: bool = Field(default=True, description="Write one access log line per request.")

    model_config = ConfigDict(frozen=True)

    @field_validator("allowed_usernames", mode="before")
    @classmethod
    def split_usernames(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return tuple(str(entry).strip().lower() for entry in value if str(entry).strip())
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def lower_format(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


def read_dotenv(path: Path) -> dict[str, str]:
    """Parse ``KEY=value`` lines, ignoring blanks and ``#`` comments."""
    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if sep and key and not key.startswith("#"):
            values[key.strip()] = value.strip()
    return values


def _environment() -> dict[str, str]:
    merged: dict[str, str] = {}
    for path in DOTENV_FILES:
        merged.update(read_dotenv(path))
    merged.update({key: value for key, value in os.environ.items() if value})
    return merged


@lru_cache
def get_settings() -> Settings:
    env = _environment()
    overrides = {field: env[var] for field, var in ENV_VARS.items() if env.get(var)}
    return Settings(**overrides)
