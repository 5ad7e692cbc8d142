"""Completion-provider side state: the last completion and the accepted flag."""

import asyncio

import structlog

from tandem.config import settings

from .models import CompletionRecord, CompletionState, FeedbackRecord, PersistResult
from .provider_types import CompletionInteractionRecorder
from .sink import FeedbackSink

logger = structlog.get_logger(__name__)


class CompletionTracker(CompletionInteractionRecorder):
    """Tracks issued completions and forwards feedback to a sink.

    A completion moves through two stages: ``begin`` marks it in flight and
    ``complete`` makes it the last completion. ``abort`` only cancels the
    in-flight one, so an earlier finished suggestion stays eligible for
    feedback.

    The coarse ``accepted_last_completion`` flag is used to suppress the
    spurious completion that fires right after a multiline suggestion is
    accepted. It is computed independently of FeedbackRecord.accepted.
    """

    def __init__(
        self,
        sink: FeedbackSink,
        acceptance_reset_delay: float | None = None,
    ) -> None:
        """Initialize tracker.

        Args:
            sink: Destination for feedback records
            acceptance_reset_delay: Seconds before the accepted flag resets
                after a selection change (defaults to settings)
        """
        self._sink = sink
        self._reset_delay = (
            settings.feedback.acceptance_reset_delay
            if acceptance_reset_delay is None
            else acceptance_reset_delay
        )
        self._last: CompletionRecord | None = None
        self._state = CompletionState()
        self._in_flight: tuple[str, str] | None = None
        self._accepted_last_completion = False
        self._reset_handle: asyncio.TimerHandle | None = None

    # === Completion lifecycle ===

    def begin(self, completion_id: str, document_path: str) -> None:
        """Mark a completion request as in flight."""
        self._in_flight = (completion_id, document_path)

    def complete(self, text: str) -> CompletionRecord | None:
        """Finish the in-flight completion with its generated text.

        Returns:
            The new CompletionRecord, or None if nothing was in flight
            (for example because it was aborted).
        """
        if self._in_flight is None:
            logger.debug("completion_finished_after_abort")
            return None

        completion_id, document_path = self._in_flight
        self._in_flight = None
        return self.issue(
            CompletionRecord(
                completion_id=completion_id,
                document_path=document_path,
                suggested_text=text,
            )
        )

    def issue(self, record: CompletionRecord) -> CompletionRecord:
        """Make ``record`` the last completion, superseding the previous one."""
        self._last = record
        self._state = CompletionState.from_record(record)
        logger.debug(
            "completion_issued",
            completion_id=record.completion_id,
            document_path=record.document_path,
            multiline=record.is_multiline,
        )
        return record

    def abort(self) -> bool:
        """Cancel the in-flight completion, if any.

        Returns:
            True if a completion was in flight
        """
        if self._in_flight is None:
            return False
        logger.debug("completion_aborted", completion_id=self._in_flight[0])
        self._in_flight = None
        return True

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    @property
    def last_completion(self) -> CompletionRecord | None:
        return self._last

    def snapshot(self) -> CompletionState:
        return self._state

    # === Accepted flag ===

    @property
    def accepted_last_completion(self) -> bool:
        return self._accepted_last_completion

    def set_accepted_last_completion(self, accepted: bool) -> None:
        self._accepted_last_completion = accepted

    def update_acceptance(self, edited_text: str) -> bool:
        """Recompute the accepted flag for an edit and return it.

        The flag is only raised for multiline suggestions inserted verbatim.
        """
        last = self._last
        accepted = bool(
            edited_text
            and last is not None
            and last.suggested_text
            and edited_text == last.suggested_text
            and last.is_multiline
        )
        self._accepted_last_completion = accepted
        return accepted

    def schedule_acceptance_reset(self) -> None:
        """Clear the accepted flag after the configured delay.

        Without a running event loop the flag is cleared immediately. A new
        call replaces any pending reset.
        """
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._accepted_last_completion = False
            return

        self._reset_handle = loop.call_later(self._reset_delay, self._reset_acceptance)

    def _reset_acceptance(self) -> None:
        self._reset_handle = None
        self._accepted_last_completion = False

    # === Persistence ===

    async def record_completion_interaction(
        self,
        accepted: bool,
        user_text: str | None,
        completion_id: str,
    ) -> PersistResult:
        record = FeedbackRecord(
            completion_id=completion_id,
            accepted=accepted,
            user_text=user_text,
        )
        return await self._sink.append(record)
