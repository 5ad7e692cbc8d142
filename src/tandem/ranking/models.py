"""Result types for relevance ranking."""

from dataclasses import dataclass

from tandem.interactions.models import InteractionFeatures


@dataclass(frozen=True)
class RankedCandidate:
    """A file proposed as retrieval context, with its score breakdown."""

    path: str
    score: float  # Blended score used for ordering
    similarity: float  # Best semantic similarity for the path (0.0 if none)
    interaction: float  # Interaction relevance normalized to 0.0-1.0
    document_id: str | None = None
    content: str = ""
    features: InteractionFeatures | None = None
