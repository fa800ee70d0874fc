"""Helpers for reading values out of nested JSON-like dictionaries."""

from typing import Any


def safe_get(data: Any, *args: str) -> Any:
    """Follow the keys in ``args`` through nested dicts.

    Returns the value found, or ``None`` when a key is missing or an
    intermediate value is not a dict.
    """
    current = data
    for key in args:
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def safe_get_string(data: Any, *args: str) -> str:
    """Like :func:`safe_get`, but return ``""`` unless the value is a string."""
    value = safe_get(data, *args)
    return value if isinstance(value, str) else ""