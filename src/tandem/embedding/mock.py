"""Deterministic embeddings for tests and offline use."""

import hashlib

import numpy as np

from .base import EmbeddingService, Vector


class MockEmbeddingService(EmbeddingService):
    """Maps each text to a reproducible unit vector.

    The vector is seeded from a digest of the text, so equal texts have
    similarity 1.0 and unrelated texts land near 0.0.
    """

    def __init__(self, dimension: int = 64) -> None:
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed(self, text: str) -> Vector:
        digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
        rng = np.random.default_rng(int.from_bytes(digest, "big"))
        vector = rng.standard_normal(self._dimension).astype(np.float32)
        return vector / np.float32(np.linalg.norm(vector))
