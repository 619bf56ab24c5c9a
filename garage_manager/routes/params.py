"""Strict parsing of report query parameters.

Report parameters arrive as raw strings so that a missing or malformed value
is reported as ``InvalidArgumentError`` before any query runs.
"""

import re
from datetime import date

from garage_manager.core.domain_exceptions import InvalidArgumentError

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def _require(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(
            "Missing query parameter",
            f"Query parameter '{name}' is required.",
        )
    return value.strip()


def parse_id(name: str, value: str | None) -> int:
    raw = _require(name, value)
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgumentError(
            "Invalid query parameter",
            f"Query parameter '{name}' must be an integer, got '{raw}'.",
        ) from None


def parse_date(name: str, value: str | None) -> date:
    """Parse a ``YYYY-MM-DD`` value."""
    raw = _require(name, value)
    try:
        if len(raw) != 10:
            raise ValueError(raw)
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidArgumentError(
            "Invalid query parameter",
            f"Query parameter '{name}' must be a date in YYYY-MM-DD format, got '{raw}'.",
        ) from None


def parse_month(name: str, value: str | None) -> date:
    """Parse a ``YYYY-MM`` value into the first day of that month."""
    raw = _require(name, value)
    match = _MONTH_PATTERN.match(raw)
    try:
        if match is None:
            raise ValueError(raw)
        return date(int(match.group(1)), int(match.group(2)), 1)
    except ValueError:
        raise InvalidArgumentError(
            "Invalid query parameter",
            f"Query parameter '{name}' must be a month in YYYY-MM format, got '{raw}'.",
        ) from None
