"""Qdrant vector store running in embedded local-path mode."""

import uuid
from pathlib import Path
from typing import Any

import structlog
from qdrant_client import AsyncQdrantClient
from qdrant_client.http import models as qmodels

from .base import Document, NotConnectedError, ScoredDocument, Vector, VectorStore

logger = structlog.get_logger(__name__)

# Namespace UUID for generating deterministic UUIDs from string IDs
_NAMESPACE = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")

_RESERVED_KEYS = ("_original_id", "path", "content")


def _to_qdrant_id(id: str) -> str:
    """Convert a string ID to a valid Qdrant UUID.

    Qdrant point IDs must be unsigned integers or UUIDs; arbitrary ids such as
    file paths are mapped to deterministic UUIDs.
    """
    try:
        uuid.UUID(id)
        return id
    except ValueError:
        pass

    return str(uuid.uuid5(_NAMESPACE, id))


class QdrantVectorStore(VectorStore):
    """Vector store backed by an embedded Qdrant database on local disk.

    Each workspace gets its own directory, and all documents live in a single
    collection inside it.
    """

    def __init__(
        self,
        path: Path | str | None,
        dimension: int,
        collection: str = "documents",
    ) -> None:
        """Initialize store (no I/O until connect()).

        Args:
            path: Storage directory, or None for a transient in-memory database
            dimension: Vector dimension
            collection: Collection name inside the database
        """
        self._path = Path(path).expanduser() if path is not None else None
        self._dimension = dimension
        self._collection = collection
        self._client: AsyncQdrantClient | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def _require_client(self) -> AsyncQdrantClient:
        if self._client is None:
            raise NotConnectedError("Vector store used before connect()")
        return self._client

    async def connect(self) -> None:
        if self._client is not None:
            return

        if self._path is None:
            client = AsyncQdrantClient(location=":memory:")
        else:
            self._path.mkdir(parents=True, exist_ok=True)
            client = AsyncQdrantClient(path=str(self._path))

        try:
            await self._ensure_collection(client)
        except Exception:
            # Release the local storage lock before propagating
            await client.close()
            raise

        self._client = client

    async def _ensure_collection(self, client: AsyncQdrantClient) -> None:
        if await client.collection_exists(self._collection):
            return

        await client.create_collection(
            collection_name=self._collection,
            vectors_config=qmodels.VectorParams(
                size=self._dimension,
                distance=qmodels.Distance.COSINE,
            ),
        )
        logger.info(
            "collection_created",
            collection=self._collection,
            path=str(self._path) if self._path else ":memory:",
        )

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.close()
        self._client = None

    async def upsert(self, document: Document) -> None:
        client = self._require_client()
        if document.vector.shape[0] != self._dimension:
            raise ValueError(
                f"Vector dimension {document.vector.shape[0]} does not match "
                f"store dimension {self._dimension}"
            )

        await client.upsert(
            collection_name=self._collection,
            points=[
                qmodels.PointStruct(
                    id=_to_qdrant_id(document.id),
                    vector=document.vector.tolist(),
                    payload={
                        **document.payload,
                        "_original_id": document.id,
                        "path": document.path,
                        "content": document.content,
                    },
                )
            ],
        )

    async def query(self, vector: Vector, k: int = 10) -> list[ScoredDocument]:
        client = self._require_client()
        if k <= 0:
            return []

        response = await client.query_points(
            collection_name=self._collection,
            query=vector.tolist(),
            limit=k,
            with_payload=True,
            with_vectors=False,
        )

        return [
            self._to_scored(point.id, point.score, point.payload)
            for point in response.points
        ]

    @staticmethod
    def _to_scored(
        point_id: Any, score: float, payload: dict[str, Any] | None
    ) -> ScoredDocument:
        payload = payload or {}
        return ScoredDocument(
            id=payload.get("_original_id", str(point_id)),
            path=payload.get("path", ""),
            score=score,
            content=payload.get("content", ""),
            payload={k: v for k, v in payload.items() if k not in _RESERVED_KEYS},
        )

    async def delete(self, id: str) -> None:
        client = self._require_client()
        await client.delete(
            collection_name=self._collection,
            points_selector=qmodels.PointIdsList(points=[_to_qdrant_id(id)]),
        )

    async def count(self) -> int:
        client = self._require_client()
        result = await client.count(collection_name=self._collection, exact=True)
        return result.count
