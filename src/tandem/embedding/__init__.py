"""Embedding service interface.

Concrete model-backed services are supplied by the host; MockEmbeddingService
is importable directly from tandem.embedding.mock for tests.
"""

from .base import EmbeddingService, Vector

__all__ = [
    "EmbeddingService",
    "Vector",
]
