import os
from typing import Optional

DEFAULT_CACHE_SIZE = 256

CACHE_SIZE_ENV = "FNMATCH_REGEX_CACHE_SIZE"
TRACE_ENV = "FNMATCH_REGEX_TRACE"

_TRUTHY = ["1", "true", "yes", "on"]


def cache_size(value: Optional[str] = None) -> int:
    if value is None:
        value = os.environ.get(CACHE_SIZE_ENV)

    if value is None or not value.strip():
        return DEFAULT_CACHE_SIZE

    try:
        result = int(value.strip())
    except ValueError:
        return DEFAULT_CACHE_SIZE

    return result if result >= 0 else DEFAULT_CACHE_SIZE


def trace_enabled(value: Optional[str] = None) -> bool:
    if value is None:
        value = os.environ.get(TRACE_ENV, "")

    return value.strip().lower() in _TRUTHY
