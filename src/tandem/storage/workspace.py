"""Workspace-scoped vector store lifecycle and document indexing."""

from pathlib import Path

import structlog

from tandem.config import settings
from tandem.embedding.base import EmbeddingService
from tandem.utils.text import sanitize_workspace_name

from .base import Document, VectorStore
from .qdrant import QdrantVectorStore

logger = structlog.get_logger(__name__)


async def open_workspace_store(
    workspace_name: str | None,
    dimension: int,
    base_dir: Path | str | None = None,
) -> QdrantVectorStore | None:
    """Connect the vector store for a workspace.

    The store lives in ``<base_dir>/<sanitized workspace name>``. Returns None
    when there is no workspace (for example a single loose file is open).

    Args:
        workspace_name: Display name of the workspace
        dimension: Embedding dimension of the stored vectors
        base_dir: Parent directory (defaults to settings.paths.embeddings_dir)
    """
    name = sanitize_workspace_name(workspace_name)
    if name is None:
        logger.info("workspace_store_skipped", reason="no_workspace")
        return None

    root = Path(base_dir or settings.paths.embeddings_dir).expanduser()
    store = QdrantVectorStore(path=root / name, dimension=dimension)
    await store.connect()

    logger.info("workspace_store_connected", workspace=name, path=str(root / name))
    return store


class WorkspaceIndex:
    """Embeds workspace files and keeps them in the vector store."""

    def __init__(
        self, embedding_service: EmbeddingService, vector_store: VectorStore
    ) -> None:
        self._embedding_service = embedding_service
        self._vector_store = vector_store

    @property
    def vector_store(self) -> VectorStore:
        return self._vector_store

    async def index_document(
        self, path: str, text: str, doc_id: str | None = None
    ) -> Document:
        """Embed ``text`` and upsert it under ``doc_id`` (defaults to path)."""
        vector = await self._embedding_service.embed(text)
        document = Document(id=doc_id or path, path=path, vector=vector, content=text)
        await self._vector_store.upsert(document)
        logger.debug("document_indexed", doc_id=document.id, path=path)
        return document

    async def index_documents(self, files: list[tuple[str, str]]) -> list[Document]:
        """Embed and upsert several ``(path, text)`` pairs in one batch."""
        if not files:
            return []
        vectors = await self._embedding_service.embed_batch([text for _, text in files])
        documents = [
            Document(id=path, path=path, vector=vector, content=text)
            for (path, text), vector in zip(files, vectors, strict=True)
        ]
        for document in documents:
            await self._vector_store.upsert(document)
        logger.info("documents_indexed", count=len(documents))
        return documents

    async def remove_document(self, doc_id: str) -> None:
        await self._vector_store.delete(doc_id)
