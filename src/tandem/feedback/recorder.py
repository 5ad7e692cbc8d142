"""Classifies edit events against the last completion and records feedback once."""

import asyncio

import structlog

from tandem.config import settings
from tandem.interactions.models import Position
from tandem.interactions.store import InteractionStore

from .dedup import CompletionDedupCache
from .models import CompletionState, FeedbackRecord, PersistResult
from .provider_types import CompletionInteractionRecorder

logger = structlog.get_logger(__name__)


class FeedbackRecorder:
    """Turns editor edits into at most one FeedbackRecord per completion.

    ``handle_edit`` runs on the editor's synchronous notification path,
    never raises and never waits for persistence. On a running event loop a
    record is scheduled as a task right away; without one it is queued until
    the next edit that arrives on a loop, or until ``drain``.
    """

    def __init__(
        self,
        provider: CompletionInteractionRecorder,
        interactions: InteractionStore,
        dedup: CompletionDedupCache | None = None,
        persist_retries: int | None = None,
    ) -> None:
        """Initialize recorder.

        Args:
            provider: Completion provider capability that performs persistence
            interactions: Store receiving stroke accounting for every edit
            dedup: Window of already-recorded completion ids
            persist_retries: Retries after a failed append (defaults to settings)
        """
        self._provider = provider
        self._interactions = interactions
        self._dedup = dedup if dedup is not None else CompletionDedupCache()
        self._retries = (
            settings.feedback.persist_retries
            if persist_retries is None
            else persist_retries
        )
        # The current completion stays deduplicated even if other ids push
        # it out of the window.
        self._last_recorded_id: str | None = None
        self._pending: set[asyncio.Task[bool]] = set()
        self._queued: list[FeedbackRecord] = []

    @property
    def dedup(self) -> CompletionDedupCache:
        return self._dedup

    def handle_edit(
        self,
        document_path: str,
        edited_text: str,
        start: Position,
        state: CompletionState,
    ) -> FeedbackRecord | None:
        """Process one edit event.

        Args:
            document_path: Path of the changed document
            edited_text: Text inserted by the edit ("" for deletions)
            start: Start position of the edited range
            state: Snapshot of the last completion from the provider

        Returns:
            The FeedbackRecord handed to persistence, or None if this edit
            produced no feedback.
        """
        record: FeedbackRecord | None = None
        try:
            record = self._classify(document_path, edited_text, state)
            if record is not None:
                self._dedup.insert(record.completion_id)
                self._last_recorded_id = record.completion_id
                self._dispatch(record)
        except Exception as e:
            logger.error(
                "feedback_recording_failed",
                document_path=document_path,
                completion_id=record.completion_id if record is not None else None,
                error=str(e),
            )
            record = None

        try:
            self._interactions.increment_strokes(start.line, start.character)
        except Exception as e:
            logger.error(
                "stroke_accounting_failed", document_path=document_path, error=str(e)
            )
        return record

    def _classify(
        self,
        document_path: str,
        edited_text: str,
        state: CompletionState,
    ) -> FeedbackRecord | None:
        if not document_path or document_path != state.document_path:
            return None

        completion_id = state.completion_id
        if not completion_id:
            return None

        if completion_id == self._last_recorded_id or self._dedup.contains(
            completion_id
        ):
            return None

        accepted = edited_text == state.text
        return FeedbackRecord(
            completion_id=completion_id,
            accepted=accepted,
            user_text=None if accepted else edited_text,
        )

    def _dispatch(self, record: FeedbackRecord) -> None:
        self._queued.append(record)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(
                "feedback_queued",
                completion_id=record.completion_id,
                queued=len(self._queued),
            )
            return

        self._schedule_queued(loop)

    def _schedule_queued(self, loop: asyncio.AbstractEventLoop) -> None:
        queued, self._queued = self._queued, []
        for record in queued:
            task = loop.create_task(self._persist(record))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _persist(self, record: FeedbackRecord) -> bool:
        """Append the record, retrying a bounded number of times.

        Returns:
            True if the record was persisted
        """
        attempts = 1 + self._retries
        for attempt in range(1, attempts + 1):
            result = await self._attempt(record)
            if result.ok:
                logger.info(
                    "feedback_recorded",
                    completion_id=record.completion_id,
                    accepted=record.accepted,
                    attempt=attempt,
                )
                return True

            logger.info(
                "feedback_persist_failed",
                completion_id=record.completion_id,
                attempt=attempt,
                error=result.error,
            )

        logger.warning(
            "feedback_dropped",
            completion_id=record.completion_id,
            attempts=attempts,
        )
        return False

    async def _attempt(self, record: FeedbackRecord) -> PersistResult:
        try:
            return await self._provider.record_completion_interaction(
                record.accepted, record.user_text, record.completion_id
            )
        except Exception as e:
            return PersistResult.failure(f"{type(e).__name__}: {e}")

    @property
    def pending(self) -> int:
        """Number of records queued or still being persisted."""
        return len(self._pending) + len(self._queued)

    async def drain(self) -> None:
        """Persist queued records and wait for every running task to finish."""
        self._schedule_queued(asyncio.get_running_loop())
        while self._pending:
            await asyncio.gather(*list(self._pending))
