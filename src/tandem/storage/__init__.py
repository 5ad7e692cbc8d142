"""Workspace vector storage and retrieval."""

from .base import (
    Document,
    NotConnectedError,
    ScoredDocument,
    Vector,
    VectorStore,
    VectorStoreError,
)
from .memory import InMemoryVectorStore
from .qdrant import QdrantVectorStore
from .workspace import WorkspaceIndex, open_workspace_store

__all__ = [
    "Document",
    "InMemoryVectorStore",
    "NotConnectedError",
    "QdrantVectorStore",
    "ScoredDocument",
    "Vector",
    "VectorStore",
    "VectorStoreError",
    "WorkspaceIndex",
    "open_workspace_store",
]
