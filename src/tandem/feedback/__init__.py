"""Completion feedback: dedup window, recorder, tracker and sinks."""

from .dedup import CompletionDedupCache
from .journal import JsonlFeedbackSink
from .models import (
    CompletionRecord,
    CompletionState,
    ContentChange,
    EditRange,
    FeedbackRecord,
    PersistResult,
    Position,
)
from .provider_types import CompletionInteractionRecorder
from .recorder import FeedbackRecorder
from .sink import FeedbackSink, MemoryFeedbackSink
from .tracker import CompletionTracker

__all__ = [
    "CompletionDedupCache",
    "CompletionInteractionRecorder",
    "CompletionRecord",
    "CompletionState",
    "CompletionTracker",
    "ContentChange",
    "EditRange",
    "FeedbackRecord",
    "FeedbackRecorder",
    "FeedbackSink",
    "JsonlFeedbackSink",
    "MemoryFeedbackSink",
    "PersistResult",
    "Position",
]
