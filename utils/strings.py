"""String processing utilities for the advocate directory.

Form fields and REPL commands hand us raw text; these helpers turn it into
values the filter code can compare without raising.
"""

import re

_WHITESPACE = re.compile(r"\s+")
_INTEGER = re.compile(r"^[+-]?\d+$")


def safe_int(val, default=None):
    """Parse *val* as an integer, returning *default* when it is not one.

    Handles:
    - None, empty / whitespace-only strings -> default
    - bool -> default (True is not a year count)
    - int -> itself
    - Strings holding an optionally signed decimal integer -> int
    - Anything else ("abc", "4.5", "5 years") -> default

    Args:
        val: Value to convert (any type)
        default: Value to return on failure (default: None)

    Returns:
        int or default
    """
    if val is None or isinstance(val, bool):
        return default
    if isinstance(val, int):
        return val
    s = str(val).strip()
    if not _INTEGER.match(s):
        return default
    return int(s)


def normalize_whitespace(s: str) -> str:
    """Collapse runs of whitespace to single spaces and strip the ends.

    Example:
        "  New   York\\n" -> "New York"
    """
    return _WHITESPACE.sub(" ", s).strip()


def contains_casefold(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test."""
    return needle.casefold() in (haystack or "").casefold()
