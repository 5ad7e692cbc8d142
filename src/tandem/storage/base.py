"""Base classes and types for the workspace vector store."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt

# Type alias for vector representation
Vector = npt.NDArray[np.float32]


class VectorStoreError(Exception):
    """Base exception for vector store operations."""

    pass


class NotConnectedError(VectorStoreError):
    """Raised when the store is used before connect()."""

    pass


@dataclass
class Document:
    """A piece of workspace content indexed for similarity search."""

    id: str
    path: str
    vector: Vector
    content: str = ""
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class ScoredDocument:
    """Result from a vector query, ordered by similarity."""

    id: str
    path: str
    score: float
    content: str = ""
    payload: dict[str, Any] = field(default_factory=dict)


class VectorStore(ABC):
    """Abstract base class for a workspace-scoped vector store.

    One instance serves one workspace for the whole process lifetime;
    ``connect`` must complete before any other call.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying storage and make sure the collection exists.

        Safe to call more than once.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying storage."""
        pass

    @abstractmethod
    async def upsert(self, document: Document) -> None:
        """Insert or replace a document by id.

        Raises:
            NotConnectedError: If connect() has not completed
            ValueError: If the vector dimension does not match the store
        """
        pass

    @abstractmethod
    async def query(self, vector: Vector, k: int = 10) -> list[ScoredDocument]:
        """Return up to ``k`` documents most similar to ``vector``.

        Raises:
            NotConnectedError: If connect() has not completed
        """
        pass

    @abstractmethod
    async def delete(self, id: str) -> None:
        """Delete a document by id. Missing ids are ignored."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of stored documents."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        pass
