"""Custom exceptions for the status cache."""


class CacheError(Exception):
    """Cache read or write failed. Callers log and continue without the cache."""
