"""Data models for per-file interaction tracking."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Position:
    """Zero-based line/character position in a document."""

    line: int
    character: int


@dataclass
class FileInteraction:
    """Counters accumulated for one path across all of its sessions."""

    path: str
    visits: int = 0
    strokes: int = 0
    sessions: int = 0
    session_seconds: float = 0.0
    last_stroke_position: Position | None = None
    recent_strokes: deque[Position] = field(default_factory=deque)
    last_active_at: datetime | None = None


@dataclass
class InteractionSession:
    """The open-to-close lifetime of one active file."""

    path: str
    started_at: datetime
    last_activity_at: datetime
    ended_at: datetime | None = None
    visits: int = 0
    strokes: int = 0
    active_seconds: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.ended_at is None


@dataclass(frozen=True)
class InteractionFeatures:
    """Ranker-facing view of a path's interaction history."""

    path: str
    visits: int
    strokes: int
    sessions: int
    session_seconds: float
    seconds_since_active: float | None
    active_lines: tuple[int, ...]
    relevance: float
