"""Small text helpers shared by the feedback and storage layers."""

import re

__all__ = ["line_break_count", "sanitize_workspace_name"]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def line_break_count(text: str | None) -> int:
    """Count line breaks in text, treating CRLF as a single break.

    Examples:
        >>> line_break_count("a\\nb\\r\\nc")
        2
        >>> line_break_count(None)
        0
    """
    if not text:
        return 0
    return len(_LINE_BREAK.findall(text))


def sanitize_workspace_name(name: str | None) -> str | None:
    """Turn a workspace display name into a safe directory/collection name.

    Every character outside ``[A-Za-z0-9_-]`` becomes an underscore. Returns
    None when there is no workspace, so callers can skip the vector store.

    Examples:
        >>> sanitize_workspace_name("my project (dev)")
        'my_project__dev_'
        >>> sanitize_workspace_name("") is None
        True
    """
    if not name:
        return None
    return _UNSAFE_NAME_CHARS.sub("_", name)
