"""Data models for completions and the feedback recorded against them."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tandem.interactions.models import Position
from tandem.utils.datetime import deserialize_datetime, serialize_datetime, utc_now
from tandem.utils.text import line_break_count


@dataclass(frozen=True)
class EditRange:
    """Range replaced by a single content change."""

    start: Position
    end: Position


@dataclass(frozen=True)
class ContentChange:
    """One content change from a document-changed notification."""

    text: str  # Text inserted by this change ("" for pure deletions)
    range: EditRange


@dataclass(frozen=True)
class CompletionRecord:
    """One AI-generated suggestion, read-only once produced."""

    completion_id: str
    document_path: str
    suggested_text: str

    @property
    def is_multiline(self) -> bool:
        """True when the suggestion spans more than two lines."""
        return line_break_count(self.suggested_text) > 1


@dataclass(frozen=True)
class CompletionState:
    """Snapshot of the most recently completed suggestion.

    Owned by the completion tracker and handed to the feedback recorder on
    every edit. All fields are None before the first completion.
    """

    text: str | None = None
    completion_id: str | None = None
    document_path: str | None = None

    @classmethod
    def from_record(cls, record: CompletionRecord) -> "CompletionState":
        """Build the state for a freshly issued completion."""
        return cls(
            text=record.suggested_text,
            completion_id=record.completion_id,
            document_path=record.document_path,
        )


@dataclass(frozen=True)
class FeedbackRecord:
    """Outcome of the user's reaction to one completion.

    ``user_text`` is set only for rejections; an empty string means the edit
    inserted nothing.
    """

    completion_id: str
    accepted: bool
    user_text: str | None = None
    recorded_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.accepted and self.user_text is not None:
            raise ValueError("Accepted feedback must not carry user_text")
        if not self.accepted and self.user_text is None:
            raise ValueError("Rejected feedback must carry user_text")

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {
            "completion_id": self.completion_id,
            "accepted": self.accepted,
            "recorded_at": serialize_datetime(self.recorded_at),
        }
        if self.user_text is not None:
            result["user_text"] = self.user_text
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeedbackRecord":
        """Parse from dict."""
        return cls(
            completion_id=data["completion_id"],
            accepted=data["accepted"],
            user_text=data.get("user_text"),
            recorded_at=deserialize_datetime(data["recorded_at"]),
        )


@dataclass(frozen=True)
class PersistResult:
    """Result of handing a feedback record to a sink."""

    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> "PersistResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "PersistResult":
        return cls(ok=False, error=error)
