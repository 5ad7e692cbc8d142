"""Maps editor notifications and user commands onto the core components."""

from collections.abc import Callable, Sequence

import structlog

from tandem.context.models import FileContextItem, SelectionContextItem, SelectionRange
from tandem.context.registry import ContextItemRegistry
from tandem.feedback.models import ContentChange, FeedbackRecord
from tandem.feedback.recorder import FeedbackRecorder
from tandem.feedback.tracker import CompletionTracker
from tandem.interactions.store import InteractionStore

logger = structlog.get_logger(__name__)

NO_SELECTION_MESSAGE = "No text selected to add to context."


class EditorEventRouter:
    """Entry point for the editor's synchronous notification callbacks.

    No method raises: failures are logged and the editor keeps going.
    """

    def __init__(
        self,
        tracker: CompletionTracker,
        recorder: FeedbackRecorder,
        interactions: InteractionStore,
        registry: ContextItemRegistry,
        workspace_root: str | None = None,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize router.

        Args:
            tracker: Completion tracker (last completion, accepted flag)
            recorder: Feedback recorder for edit events
            interactions: Per-file interaction store
            registry: Pinned context items
            workspace_root: Root used to make context paths relative
            notify: Callback for non-blocking informational messages
        """
        self._tracker = tracker
        self._recorder = recorder
        self._interactions = interactions
        self._registry = registry
        self._workspace_root = workspace_root
        self._notify = notify

    # === Document lifecycle ===

    def document_opened(self, path: str) -> None:
        """A document became active: switch the session and count a visit."""
        try:
            self._interactions.end_session()
            self._interactions.start_session(path)
            self._interactions.increment_visits()
        except Exception as e:
            logger.error("document_open_failed", path=path, error=str(e))

    def document_closed(self, path: str) -> None:
        """A document is no longer tracked: close its session and drop its state."""
        try:
            session = self._interactions.current_session
            if session is not None and session.path == path:
                self._interactions.end_session()
            self._interactions.delete(path)
        except Exception as e:
            logger.error("document_close_failed", path=path, error=str(e))

    def document_changed(
        self, path: str, changes: Sequence[ContentChange]
    ) -> FeedbackRecord | None:
        """Handle a content change; only the first change of the batch counts.

        Returns:
            The feedback record produced by this edit, if any
        """
        if not changes:
            return None

        change = changes[0]
        try:
            self._tracker.update_acceptance(change.text)
            return self._recorder.handle_edit(
                document_path=path,
                edited_text=change.text,
                start=change.range.start,
                state=self._tracker.snapshot(),
            )
        except Exception as e:
            logger.error("document_change_failed", path=path, error=str(e))
            return None

    def selection_changed(self) -> None:
        """Cursor or selection moved: cancel the in-flight completion."""
        try:
            self._tracker.abort()
            self._tracker.schedule_acceptance_reset()
        except Exception as e:
            logger.error("selection_change_failed", error=str(e))

    # === Context commands ===

    def add_file_to_context(self, path: str) -> FileContextItem:
        item = FileContextItem.for_path(path, self._workspace_root)
        self._registry.add(item)
        return item

    def add_selection_to_context(
        self,
        path: str,
        text: str,
        selection_range: SelectionRange | None,
    ) -> SelectionContextItem | None:
        """Pin the current selection; tells the user when nothing is selected."""
        if selection_range is None or selection_range.is_empty or not text:
            logger.info("selection_context_skipped", path=path)
            if self._notify is not None:
                self._notify(NO_SELECTION_MESSAGE)
            return None

        item = SelectionContextItem.from_selection(
            path, text, selection_range, self._workspace_root
        )
        self._registry.add(item)
        return item
