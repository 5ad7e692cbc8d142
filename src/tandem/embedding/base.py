"""Embedding seam used by the ranker and the workspace index."""

from abc import ABC, abstractmethod

import numpy as np
import numpy.typing as npt

Vector = npt.NDArray[np.float32]


class EmbeddingService(ABC):
    """Turns text into fixed-size vectors.

    The model behind it belongs to the host; Tandem only needs single-text
    embedding and the output dimension, which sizes the workspace store.
    """

    @abstractmethod
    async def embed(self, text: str) -> Vector:
        """Embed one text as a float32 vector of length ``dimension``."""
        ...

    async def embed_batch(self, texts: list[str]) -> list[Vector]:
        """Embed several texts in order.

        Services backed by a batching model should override this.
        """
        return [await self.embed(text) for text in texts]

    @property
    @abstractmethod
    def dimension(self) -> int: ...
