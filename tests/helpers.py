"""Shared test doubles and builders."""

import asyncio
from datetime import UTC, datetime, timedelta

from tandem.feedback.models import (
    CompletionRecord,
    ContentChange,
    EditRange,
    FeedbackRecord,
    PersistResult,
)
from tandem.feedback.sink import FeedbackSink
from tandem.interactions.models import Position


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 6, 9, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FlakySink(FeedbackSink):
    """Sink that fails a fixed number of times before succeeding."""

    def __init__(self, failures: int, raise_error: bool = False) -> None:
        self.failures = failures
        self.raise_error = raise_error
        self.calls = 0
        self.records: list[FeedbackRecord] = []

    async def append(self, record: FeedbackRecord) -> PersistResult:
        self.calls += 1
        if self.calls <= self.failures:
            if self.raise_error:
                raise OSError("disk unavailable")
            return PersistResult.failure("disk unavailable")
        self.records.append(record)
        return PersistResult.success()


class SlowSink(FeedbackSink):
    """Sink whose appends take ``delay`` seconds and fail ``failures`` times."""

    def __init__(self, delay: float, failures: int = 0) -> None:
        self.delay = delay
        self.failures = failures
        self.calls = 0
        self.records: list[FeedbackRecord] = []

    async def append(self, record: FeedbackRecord) -> PersistResult:
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.calls <= self.failures:
            return PersistResult.failure("timed out")
        self.records.append(record)
        return PersistResult.success()


def change(text: str, line: int = 0, character: int = 0) -> ContentChange:
    """Build a single content change starting at (line, character)."""
    start = Position(line=line, character=character)
    return ContentChange(text=text, range=EditRange(start=start, end=start))


def completion(completion_id: str, document_path: str, text: str) -> CompletionRecord:
    return CompletionRecord(
        completion_id=completion_id,
        document_path=document_path,
        suggested_text=text,
    )
