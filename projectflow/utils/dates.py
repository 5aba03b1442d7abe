from datetime import date, datetime


def parse_date(value):
    """
    Parse a calendar date from the store.

    Accepts ``YYYY-MM-DD`` strings, full ISO timestamps (only the date part
    is kept), ``date`` and ``datetime`` objects. Blank strings and None
    mean "not set".

    Args:
        value: Raw value from a JSON document or a Python date

    Returns:
        date or None

    Raises:
        ValueError: If the value is a non-blank string that is not ISO-8601
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if len(value) == 10:
            return date.fromisoformat(value)
        return parse_timestamp(value).date()
    raise ValueError(f"Cannot interpret {value!r} as a date")


def parse_timestamp(value):
    """
    Parse an ISO-8601 timestamp such as ``2025-04-01T09:30:00.000Z``.

    Returns:
        datetime or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    raise ValueError(f"Cannot interpret {value!r} as a timestamp")


def to_day(value):
    """Truncate a date or datetime to its calendar day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start, end):
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (to_day(end) - to_day(start)).days


def format_date(value):
    """ISO string for a date/datetime, or None."""
    if value is None:
        return None
    return value.isoformat()
