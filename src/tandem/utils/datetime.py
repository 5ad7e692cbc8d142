"""Timestamp helpers for the feedback log.

Records are written as ISO 8601 strings with an explicit UTC offset. Older
or hand-edited logs may carry a ``Z`` suffix, a naive timestamp (read as UTC)
or epoch seconds; all of them load as aware datetimes.
"""

from datetime import UTC, datetime

__all__ = ["serialize_datetime", "deserialize_datetime", "utc_now"]


def utc_now() -> datetime:
    return datetime.now(UTC)


def serialize_datetime(dt: datetime) -> str:
    """Format ``dt`` for the log, treating naive values as UTC.

    Examples:
        >>> serialize_datetime(datetime(2025, 1, 6, 9, 0, tzinfo=UTC))
        '2025-01-06T09:00:00+00:00'
    """
    return _as_aware(dt).isoformat()


def deserialize_datetime(value: str | float | int) -> datetime:
    """Parse a logged timestamp.

    Raises:
        ValueError: If a string or number does not describe a valid instant
        TypeError: For any other type, including bool
    """
    if isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            return _as_aware(datetime.fromisoformat(text))
        except ValueError as e:
            raise ValueError(f"Cannot parse ISO datetime string: {value!r}") from e

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(
            f"Expected an ISO 8601 string or epoch seconds, "
            f"got {type(value).__name__}: {value!r}"
        )

    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OSError, OverflowError, ValueError) as e:
        raise ValueError(f"Cannot parse Unix timestamp: {value!r}") from e


def _as_aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)
