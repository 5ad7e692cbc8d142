"""Append-only destinations for feedback records."""

from abc import ABC, abstractmethod

from .models import FeedbackRecord, PersistResult


class FeedbackSink(ABC):
    """Abstract append-only log of feedback records.

    Implementations report failures through the returned PersistResult.
    Callers still guard against exceptions, but a well-behaved sink never
    raises from ``append``.
    """

    @abstractmethod
    async def append(self, record: FeedbackRecord) -> PersistResult:
        """Append one record.

        Args:
            record: Feedback record to persist

        Returns:
            PersistResult describing success or the failure reason
        """
        ...


class MemoryFeedbackSink(FeedbackSink):
    """In-process sink for tests and development."""

    def __init__(self) -> None:
        self.records: list[FeedbackRecord] = []

    async def append(self, record: FeedbackRecord) -> PersistResult:
        self.records.append(record)
        return PersistResult.success()
