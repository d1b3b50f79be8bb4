"""Runtime configuration loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_DB_PATH = "eventreg.db"
DEFAULT_UNIT_PRICE = 100_000
DEFAULT_STATUS_CACHE_TTL = 300

CACHE_BACKENDS = ("auto", "memory", "none")


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass
class Settings:
    """Application settings.

    Attributes:
        db_path: SQLite database file, or ":memory:".
        redis_rest_url: Base URL of the Redis REST endpoint (optional).
        redis_rest_token: Bearer token for the Redis REST endpoint (optional).
        cache_backend: "auto" uses Redis when both URL and token are set and
            no cache otherwise; "memory" uses an in-process cache; "none"
            disables caching.
        status_cache_ttl: Expiry in seconds for cached status lookups.
        unit_price: Fee per registered person.
    """

    db_path: str = DEFAULT_DB_PATH
    redis_rest_url: str | None = None
    redis_rest_token: str | None = None
    cache_backend: str = "auto"
    status_cache_ttl: int = DEFAULT_STATUS_CACHE_TTL
    unit_price: int = DEFAULT_UNIT_PRICE

    def __post_init__(self) -> None:
        if self.cache_backend not in CACHE_BACKENDS:
            raise ConfigError(
                f"Invalid cache backend '{self.cache_backend}', "
                f"expected one of: {', '.join(CACHE_BACKENDS)}"
            )
        if self.status_cache_ttl <= 0:
            raise ConfigError("Status cache TTL must be positive")
        if self.unit_price <= 0:
            raise ConfigError("Unit price must be positive")

    @property
    def redis_configured(self) -> bool:
        """Whether both Redis REST URL and token are present."""
        return bool(self.redis_rest_url and self.redis_rest_token)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from EVENTREG_* environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a value cannot be parsed or is out of range.
        """
        if environ is None:
            environ = os.environ

        return cls(
            db_path=environ.get("EVENTREG_DB_PATH", DEFAULT_DB_PATH),
            redis_rest_url=environ.get("EVENTREG_REDIS_REST_URL") or None,
            redis_rest_token=environ.get("EVENTREG_REDIS_REST_TOKEN") or None,
            cache_backend=environ.get("EVENTREG_CACHE_BACKEND", "auto").lower(),
            status_cache_ttl=_parse_int(
                environ, "EVENTREG_STATUS_CACHE_TTL", DEFAULT_STATUS_CACHE_TTL
            ),
            unit_price=_parse_int(environ, "EVENTREG_UNIT_PRICE", DEFAULT_UNIT_PRICE),
        )


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got '{raw}'") from e
