"""User-pinned context items (files and selections)."""

from .models import (
    ContextItem,
    FileContextItem,
    SelectionContextItem,
    SelectionRange,
    workspace_relative,
)
from .registry import ContextItemRegistry

__all__ = [
    "ContextItem",
    "ContextItemRegistry",
    "FileContextItem",
    "SelectionContextItem",
    "SelectionRange",
    "workspace_relative",
]
