"""Per-file interaction tracking (visits, keystrokes, dwell time)."""

from .exceptions import InteractionError, SessionActiveError
from .models import FileInteraction, InteractionFeatures, InteractionSession, Position
from .store import InteractionStore

__all__ = [
    "FileInteraction",
    "InteractionError",
    "InteractionFeatures",
    "InteractionSession",
    "InteractionStore",
    "Position",
    "SessionActiveError",
]
