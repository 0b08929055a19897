"""Jinja2 filters available inside template expressions.

Expressions are compiled by a sandboxed Jinja2 environment, so any filter
registered here can be used in markers and directives:

    {{ released | format_datetime }}
    % if notes | is_blank
"""

from datetime import UTC, datetime
from typing import Any


def format_datetime(dt: datetime | str | None) -> str:
    """Format a datetime for display.

    Args:
        dt: Datetime object or ISO string

    Returns:
        Formatted date string, "N/A" for None
    """
    if dt is None:
        return "N/A"

    if isinstance(dt, str):
        try:
            dt = datetime.fromisoformat(dt)
        except ValueError:
            return dt

    # Naive datetimes are treated as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def is_blank(value: Any) -> bool:
    """Check if a value renders as nothing.

    Args:
        value: Any template value

    Returns:
        True for None, empty values and whitespace-only strings
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    try:
        return len(value) == 0
    except TypeError:
        return False


FILTERS = {
    "format_datetime": format_datetime,
    "is_blank": is_blank,
}
