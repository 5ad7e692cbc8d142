"""Composition root wiring the feedback, interaction and ranking components."""

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from tandem.context.registry import ContextItemRegistry
from tandem.editor.router import EditorEventRouter
from tandem.embedding.base import EmbeddingService
from tandem.feedback.dedup import CompletionDedupCache
from tandem.feedback.journal import JsonlFeedbackSink
from tandem.feedback.recorder import FeedbackRecorder
from tandem.feedback.sink import FeedbackSink
from tandem.feedback.tracker import CompletionTracker
from tandem.interactions.store import InteractionStore
from tandem.ranking.ranker import RelevanceRanker
from tandem.storage.base import VectorStore
from tandem.storage.workspace import WorkspaceIndex, open_workspace_store

logger = structlog.get_logger(__name__)


@dataclass
class TandemCore:
    """All core components for one editor window."""

    tracker: CompletionTracker
    recorder: FeedbackRecorder
    interactions: InteractionStore
    registry: ContextItemRegistry
    router: EditorEventRouter
    ranker: RelevanceRanker
    index: WorkspaceIndex | None = None
    vector_store: VectorStore | None = None

    @classmethod
    async def activate(
        cls,
        workspace_name: str | None = None,
        *,
        sink: FeedbackSink | None = None,
        embedding_service: EmbeddingService | None = None,
        vector_store: VectorStore | None = None,
        workspace_root: str | None = None,
        notify: Callable[[str], None] | None = None,
    ) -> "TandemCore":
        """Build and connect the core.

        The workspace vector store is opened when a workspace name and an
        embedding service are available and no store was passed in. If the
        store cannot be opened the core runs without semantic search.

        Args:
            workspace_name: Editor workspace name (None for loose files)
            sink: Feedback destination (defaults to the JSONL completions log)
            embedding_service: Embedding collaborator for semantic ranking
            vector_store: Pre-built store, connected here if needed
            workspace_root: Root used to relativize context item paths
            notify: Callback for non-blocking informational messages
        """
        logger.info("tandem_activating", workspace=workspace_name)

        try:
            if vector_store is None and embedding_service is not None:
                vector_store = await open_workspace_store(
                    workspace_name, dimension=embedding_service.dimension
                )
            elif vector_store is not None and not vector_store.is_connected:
                await vector_store.connect()
        except Exception as e:
            # Ranking falls back to interaction history without a store
            logger.warning(
                "workspace_store_unavailable",
                workspace=workspace_name,
                error=str(e),
            )
            vector_store = None

        interactions = InteractionStore()
        registry = ContextItemRegistry()
        tracker = CompletionTracker(sink or JsonlFeedbackSink())
        recorder = FeedbackRecorder(tracker, interactions, CompletionDedupCache())
        router = EditorEventRouter(
            tracker,
            recorder,
            interactions,
            registry,
            workspace_root=workspace_root,
            notify=notify,
        )
        ranker = RelevanceRanker(interactions, vector_store, embedding_service)
        index = (
            WorkspaceIndex(embedding_service, vector_store)
            if vector_store is not None and embedding_service is not None
            else None
        )

        logger.info(
            "tandem_activated",
            workspace=workspace_name,
            semantic_search=index is not None,
        )
        return cls(
            tracker=tracker,
            recorder=recorder,
            interactions=interactions,
            registry=registry,
            router=router,
            ranker=ranker,
            index=index,
            vector_store=vector_store,
        )

    async def deactivate(self) -> None:
        """Flush pending feedback and release the vector store."""
        await self.recorder.drain()
        self.interactions.end_session()
        if self.vector_store is not None:
            await self.vector_store.close()
        logger.info("tandem_deactivated")
