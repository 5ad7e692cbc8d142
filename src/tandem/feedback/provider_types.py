"""Capability interface the feedback recorder depends on.

The completion provider owns the "last completion" state and the actual
persistence call; the recorder only reads the state and delegates writes.
"""

from abc import ABC, abstractmethod

from .models import CompletionState, PersistResult

__all__ = ["CompletionInteractionRecorder"]


class CompletionInteractionRecorder(ABC):
    """Abstract completion-provider capability used by FeedbackRecorder."""

    @abstractmethod
    def snapshot(self) -> CompletionState:
        """Return the state of the most recently completed suggestion."""
        ...

    @abstractmethod
    async def record_completion_interaction(
        self,
        accepted: bool,
        user_text: str | None,
        completion_id: str,
    ) -> PersistResult:
        """Persist the user's reaction to a completion.

        Args:
            accepted: Whether the edit matched the suggestion exactly
            user_text: Text typed instead of the suggestion (None if accepted)
            completion_id: Identifier of the completion being judged

        Returns:
            PersistResult from the underlying sink
        """
        ...
