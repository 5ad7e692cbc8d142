"""Tandem utility modules.

Provides centralized utilities for:
- datetime: Consistent datetime serialization/deserialization
- text: Line-break counting and workspace name sanitizing
"""

from tandem.utils.datetime import deserialize_datetime, serialize_datetime, utc_now
from tandem.utils.text import line_break_count, sanitize_workspace_name

__all__ = [
    "deserialize_datetime",
    "line_break_count",
    "sanitize_workspace_name",
    "serialize_datetime",
    "utc_now",
]
