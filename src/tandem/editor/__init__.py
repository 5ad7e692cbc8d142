"""Editor notification wiring."""

from .router import NO_SELECTION_MESSAGE, EditorEventRouter

__all__ = ["EditorEventRouter", "NO_SELECTION_MESSAGE"]
