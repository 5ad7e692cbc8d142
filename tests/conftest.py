"""Pytest configuration and fixtures."""

import pytest

from tandem.context.registry import ContextItemRegistry
from tandem.editor.router import EditorEventRouter
from tandem.feedback.dedup import CompletionDedupCache
from tandem.feedback.recorder import FeedbackRecorder
from tandem.feedback.sink import MemoryFeedbackSink
from tandem.feedback.tracker import CompletionTracker
from tandem.interactions.store import InteractionStore
from tests.helpers import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> MemoryFeedbackSink:
    return MemoryFeedbackSink()


@pytest.fixture
def interactions(clock: FakeClock) -> InteractionStore:
    return InteractionStore(clock=clock)


@pytest.fixture
def tracker(sink: MemoryFeedbackSink) -> CompletionTracker:
    return CompletionTracker(sink, acceptance_reset_delay=0.01)


@pytest.fixture
def recorder(
    tracker: CompletionTracker, interactions: InteractionStore
) -> FeedbackRecorder:
    return FeedbackRecorder(
        tracker, interactions, CompletionDedupCache(capacity=10), persist_retries=1
    )


@pytest.fixture
def registry() -> ContextItemRegistry:
    return ContextItemRegistry()


@pytest.fixture
def router(
    tracker: CompletionTracker,
    recorder: FeedbackRecorder,
    interactions: InteractionStore,
    registry: ContextItemRegistry,
) -> EditorEventRouter:
    return EditorEventRouter(
        tracker, recorder, interactions, registry, workspace_root="/work"
    )
