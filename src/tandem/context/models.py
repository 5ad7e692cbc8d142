"""Data models for user-pinned context items."""

import uuid
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, ClassVar


def workspace_relative(path: str, workspace_root: str | None = None) -> str:
    """Express ``path`` relative to the workspace root when it lies inside it.

    Paths outside the workspace, or calls without a root, are returned
    unchanged (with forward slashes).
    """
    pure = PurePath(path)
    if workspace_root and pure.is_absolute():
        try:
            pure = pure.relative_to(workspace_root)
        except ValueError:
            pass
    return pure.as_posix()


@dataclass(frozen=True)
class SelectionRange:
    """Zero-based range of a text selection."""

    start_line: int
    start_character: int
    end_line: int
    end_character: int

    def __post_init__(self) -> None:
        if (self.end_line, self.end_character) < (
            self.start_line,
            self.start_character,
        ):
            raise ValueError("Selection end precedes its start")

    @property
    def is_empty(self) -> bool:
        return (self.start_line, self.start_character) == (
            self.end_line,
            self.end_character,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "start_line": self.start_line,
            "start_character": self.start_character,
            "end_line": self.end_line,
            "end_character": self.end_character,
        }


@dataclass(frozen=True)
class ContextItem:
    """Base for items pinned as extra input to the next AI request."""

    category: ClassVar[str] = ""

    id: str
    name: str
    path: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.id,
            "category": self.category,
            "name": self.name,
            "path": self.path,
        }


@dataclass(frozen=True)
class FileContextItem(ContextItem):
    """A whole file. Its id is the workspace-relative path."""

    category: ClassVar[str] = "file"

    @classmethod
    def for_path(
        cls, path: str, workspace_root: str | None = None
    ) -> "FileContextItem":
        relative = workspace_relative(path, workspace_root)
        return cls(id=relative, name=PurePath(path).name, path=relative)


@dataclass(frozen=True)
class SelectionContextItem(ContextItem):
    """A captured text selection. Every capture gets a fresh id."""

    category: ClassVar[str] = "selection"

    content: str = ""
    selection_range: SelectionRange = field(
        default_factory=lambda: SelectionRange(0, 0, 0, 0)
    )

    @classmethod
    def from_selection(
        cls,
        path: str,
        content: str,
        selection_range: SelectionRange,
        workspace_root: str | None = None,
    ) -> "SelectionContextItem":
        relative = workspace_relative(path, workspace_root)
        name = (
            f"Selection from {PurePath(relative).name} "
            f"(L{selection_range.start_line + 1}-L{selection_range.end_line + 1})"
        )
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            path=relative,
            content=content,
            selection_range=selection_range,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["content"] = self.content
        result["selection_range"] = self.selection_range.to_dict()
        return result
