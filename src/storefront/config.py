"""Application settings read from the environment.

Persistence settings (providers, database URIs) live in ``domain.toml`` and
are selected with ``PROTEAN_ENV``; this module only covers what the web
layer and services need on top of that.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _get_int(name: str, fallback: int, minimum: int | None = None) -> int:
    raw_value = os.getenv(name)
    value = int(raw_value) if raw_value else fallback
    if minimum is not None and value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def _get_list(name: str, fallback: str = "") -> list[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", os.getenv("PROTEAN_ENV", "development")))
    stock_conflict_retries: int = field(default_factory=lambda: _get_int("STOCK_CONFLICT_RETRIES", 3, minimum=1))
    allowed_origins: list[str] = field(default_factory=lambda: _get_list("ALLOWED_ORIGINS", "*"))


settings = Settings()
