"""In-memory vector store implementation for testing and development."""

import numpy as np

from .base import Document, NotConnectedError, ScoredDocument, Vector, VectorStore


class InMemoryVectorStore(VectorStore):
    """In-memory vector store using numpy for cosine similarity."""

    def __init__(self, dimension: int) -> None:
        """Initialize the in-memory store.

        Args:
            dimension: Vector dimension accepted by the store
        """
        self._dimension = dimension
        self._documents: dict[str, Document] = {}
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        self._connected = True

    async def close(self) -> None:
        self._connected = False

    def _require_connection(self) -> None:
        if not self._connected:
            raise NotConnectedError("Vector store used before connect()")

    async def upsert(self, document: Document) -> None:
        """Insert or update a document."""
        self._require_connection()

        if document.vector.shape[0] != self._dimension:
            raise ValueError(
                f"Vector dimension {document.vector.shape[0]} does not match "
                f"store dimension {self._dimension}"
            )

        self._documents[document.id] = Document(
            id=document.id,
            path=document.path,
            vector=document.vector.copy(),
            content=document.content,
            payload=document.payload.copy(),
        )

    async def query(self, vector: Vector, k: int = 10) -> list[ScoredDocument]:
        """Rank stored documents by cosine similarity."""
        self._require_connection()

        if not self._documents or k <= 0:
            return []

        results = []
        query_norm = np.linalg.norm(vector)

        for document in self._documents.values():
            doc_norm = np.linalg.norm(document.vector)
            if query_norm == 0 or doc_norm == 0:
                similarity = 0.0
            else:
                similarity = float(
                    np.dot(vector, document.vector) / (query_norm * doc_norm)
                )

            results.append(
                ScoredDocument(
                    id=document.id,
                    path=document.path,
                    score=similarity,
                    content=document.content,
                    payload=document.payload.copy(),
                )
            )

        results.sort(key=lambda r: r.score, reverse=True)
        return results[:k]

    async def delete(self, id: str) -> None:
        self._require_connection()
        self._documents.pop(id, None)

    async def count(self) -> int:
        self._require_connection()
        return len(self._documents)
