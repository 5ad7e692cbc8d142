"""Tests for EditorEventRouter wiring of editor notifications."""

import pytest

from tandem.context.models import SelectionRange
from tandem.context.registry import ContextItemRegistry
from tandem.editor.router import NO_SELECTION_MESSAGE, EditorEventRouter
from tandem.feedback.recorder import FeedbackRecorder
from tandem.feedback.sink import MemoryFeedbackSink
from tandem.feedback.tracker import CompletionTracker
from tandem.interactions.models import Position
from tandem.interactions.store import InteractionStore
from tests.helpers import change, completion

A_TS = "/work/src/a.ts"
B_TS = "/work/src/b.ts"


class TestDocumentLifecycle:
    def test_open_starts_session_and_counts_visit(
        self, router: EditorEventRouter, interactions: InteractionStore
    ) -> None:
        router.document_opened(A_TS)

        session = interactions.current_session
        assert session is not None
        assert session.path == A_TS
        interaction = interactions.get(A_TS)
        assert interaction is not None
        assert interaction.visits == 1

    def test_switching_files_ends_previous_session(
        self, router: EditorEventRouter, interactions: InteractionStore
    ) -> None:
        router.document_opened(A_TS)
        router.document_opened(B_TS)
        router.document_opened(A_TS)

        a = interactions.get(A_TS)
        assert a is not None
        assert a.visits == 2
        assert a.sessions == 2
        assert interactions.current_session is not None
        assert interactions.current_session.path == A_TS

    def test_close_drops_state(
        self, router: EditorEventRouter, interactions: InteractionStore
    ) -> None:
        router.document_opened(A_TS)
        router.document_closed(A_TS)

        assert interactions.current_session is None
        assert A_TS not in interactions

    def test_closing_background_file_keeps_active_session(
        self, router: EditorEventRouter, interactions: InteractionStore
    ) -> None:
        router.document_opened(B_TS)
        router.document_opened(A_TS)
        router.document_closed(B_TS)

        assert B_TS not in interactions
        assert interactions.current_session is not None
        assert interactions.current_session.path == A_TS


class TestDocumentChanged:
    async def test_accepted_completion_scenario(
        self,
        router: EditorEventRouter,
        tracker: CompletionTracker,
        recorder: FeedbackRecorder,
        sink: MemoryFeedbackSink,
    ) -> None:
        router.document_opened(A_TS)
        tracker.issue(completion("c1", A_TS, "return x + y"))

        first = router.document_changed(A_TS, [change("return x + y")])
        second = router.document_changed(A_TS, [change("more")])

        assert first is not None and first.accepted
        assert second is None
        await recorder.drain()
        assert [(r.completion_id, r.accepted) for r in sink.records] == [("c1", True)]

    async def test_edit_in_other_file(
        self,
        router: EditorEventRouter,
        tracker: CompletionTracker,
        interactions: InteractionStore,
        sink: MemoryFeedbackSink,
    ) -> None:
        tracker.issue(completion("c2", A_TS, "foo"))
        router.document_opened(B_TS)

        assert router.document_changed(B_TS, [change("foo", 4, 2)]) is None

        interaction = interactions.get(B_TS)
        assert interaction is not None
        assert interaction.strokes == 1
        assert interaction.last_stroke_position == Position(4, 2)
        assert sink.records == []

    def test_only_first_change_counts(
        self, router: EditorEventRouter, interactions: InteractionStore
    ) -> None:
        router.document_opened(A_TS)

        router.document_changed(A_TS, [change("a", 1, 1), change("b", 9, 9)])

        interaction = interactions.get(A_TS)
        assert interaction is not None
        assert interaction.strokes == 1
        assert interaction.last_stroke_position == Position(1, 1)

    def test_empty_change_list_ignored(
        self, router: EditorEventRouter, interactions: InteractionStore
    ) -> None:
        router.document_opened(A_TS)
        assert router.document_changed(A_TS, []) is None
        interaction = interactions.get(A_TS)
        assert interaction is not None
        assert interaction.strokes == 0

    def test_failures_do_not_escape(
        self,
        router: EditorEventRouter,
        tracker: CompletionTracker,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def broken(edited_text: str) -> bool:
            raise RuntimeError("boom")

        monkeypatch.setattr(tracker, "update_acceptance", broken)

        assert router.document_changed(A_TS, [change("x")]) is None


class TestSelectionChanged:
    async def test_aborts_in_flight_completion(
        self, router: EditorEventRouter, tracker: CompletionTracker
    ) -> None:
        tracker.issue(completion("c1", A_TS, "old"))
        tracker.begin("c2", A_TS)

        router.selection_changed()

        assert not tracker.in_flight
        assert tracker.complete("new") is None
        assert tracker.snapshot().completion_id == "c1"


class TestContextCommands:
    def test_add_file_twice(
        self, router: EditorEventRouter, registry: ContextItemRegistry
    ) -> None:
        router.add_file_to_context(A_TS)
        item = router.add_file_to_context(A_TS)

        assert item.id == "src/a.ts"
        assert len(registry) == 1

    def test_add_same_selection_twice(
        self, router: EditorEventRouter, registry: ContextItemRegistry
    ) -> None:
        selected = SelectionRange(2, 0, 4, 10)
        router.add_selection_to_context(A_TS, "let x = 1;", selected)
        item = router.add_selection_to_context(A_TS, "let x = 1;", selected)

        assert item is not None
        assert item.name == "Selection from a.ts (L3-L5)"
        assert len(registry) == 2

    @pytest.mark.parametrize(
        "text,selected",
        [
            ("", SelectionRange(1, 0, 1, 4)),
            ("abc", SelectionRange(1, 4, 1, 4)),
            ("abc", None),
        ],
    )
    def test_empty_selection_notifies(
        self,
        tracker: CompletionTracker,
        recorder: FeedbackRecorder,
        interactions: InteractionStore,
        registry: ContextItemRegistry,
        text: str,
        selected: SelectionRange | None,
    ) -> None:
        messages: list[str] = []
        router = EditorEventRouter(
            tracker, recorder, interactions, registry, notify=messages.append
        )

        assert router.add_selection_to_context(A_TS, text, selected) is None
        assert messages == [NO_SELECTION_MESSAGE]
        assert len(registry) == 0
