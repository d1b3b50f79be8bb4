"""RedisRestCache - Redis over an HTTP REST endpoint (Upstash compatible)."""

from __future__ import annotations

from typing import Any

import httpx

from eventreg.cache.exceptions import CacheError
from eventreg.logging import get_logger, sanitize_for_log, truncate_output

logger = get_logger("cache")


class RedisRestCache:
    """Cache backed by a Redis REST endpoint.

    Each command is POSTed to the base URL as a JSON array, e.g.
    ``["SET", "status:abc", "{...}", "EX", 300]``, and the endpoint answers
    ``{"result": ...}`` or ``{"error": "..."}``.
    """

    def __init__(self, url: str, token: str, timeout: float = 5.0) -> None:
        """Initialize the cache client.

        Args:
            url: Base URL of the REST endpoint
            token: Bearer token for the endpoint
            timeout: Per-request timeout in seconds
        """
        self.url = url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the REST endpoint."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _command(self, *args: Any) -> Any:
        """Execute one Redis command.

        Returns:
            The command's ``result`` value

        Raises:
            CacheError: On transport failure, non-200 status or an error reply
        """
        try:
            response = self.client.post(self.url, json=list(args))
        except httpx.HTTPError as e:
            raise CacheError(f"Redis {args[0]} request failed: {sanitize_for_log(str(e))}") from e

        if response.status_code != 200:
            body = sanitize_for_log(truncate_output(response.text))
            raise CacheError(f"Redis {args[0]} failed: {response.status_code} - {body}")

        try:
            data = response.json()
        except ValueError as e:
            raise CacheError(f"Redis {args[0]} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise CacheError(
                f"Redis {args[0]} returned {type(data).__name__}, expected a JSON object"
            )
        if "error" in data:
            raise CacheError(f"Redis {args[0]} error: {data['error']}")

        return data.get("result")

    def get(self, key: str) -> str | None:
        result = self._command("GET", key)
        if result is None:
            return None
        if not isinstance(result, str):
            raise CacheError(f"Unexpected GET result type: {type(result).__name__}")
        return result

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._command("SET", key, value, "EX", ttl_seconds)
        logger.debug("Cached %s for %ds", key, ttl_seconds)
