"""Tandem: completion feedback and context relevance engine for AI editors."""

from tandem.config import settings
from tandem.core import TandemCore
from tandem.logging import configure_logging

__version__ = "0.1.0"

__all__ = ["TandemCore", "configure_logging", "settings", "__version__"]
