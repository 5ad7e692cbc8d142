"""Blends semantic similarity with interaction history to order context."""

import numpy as np
import structlog

from tandem.config import settings
from tandem.embedding.base import EmbeddingService
from tandem.interactions.models import InteractionFeatures
from tandem.interactions.store import InteractionStore
from tandem.storage.base import ScoredDocument, Vector, VectorStore

from .models import RankedCandidate

logger = structlog.get_logger(__name__)


class RelevanceRanker:
    """Orders candidate context files for the prompt builder.

    Candidates are the union of vector-store hits and files with interaction
    history. Each gets ``semantic_weight * similarity + interaction_weight *
    normalized_interaction``. Without a vector store (no workspace) ranking
    falls back to interaction history alone.
    """

    def __init__(
        self,
        interactions: InteractionStore,
        vector_store: VectorStore | None = None,
        embedding_service: EmbeddingService | None = None,
        semantic_weight: float | None = None,
        interaction_weight: float | None = None,
    ) -> None:
        cfg = settings.ranking
        self._interactions = interactions
        self._vector_store = vector_store
        self._embedding_service = embedding_service
        self._semantic_weight = (
            cfg.semantic_weight if semantic_weight is None else semantic_weight
        )
        self._interaction_weight = (
            cfg.interaction_weight if interaction_weight is None else interaction_weight
        )
        self._logger = logger.bind(component="relevance_ranker")

    async def rank(
        self,
        query: str,
        limit: int | None = None,
        exclude: set[str] | None = None,
    ) -> list[RankedCandidate]:
        """Rank context candidates for a natural-language or code query.

        Args:
            query: Text to embed for the semantic part of the score
            limit: Maximum candidates (defaults to settings)
            exclude: Paths to leave out, such as the document being edited

        Returns:
            Candidates ordered by blended score, highest first
        """
        vector: Vector | None = None
        if query.strip() and self._can_search:
            assert self._embedding_service is not None
            try:
                vector = await self._embedding_service.embed(query)
            except Exception as e:
                self._logger.warning("query_embedding_failed", error=str(e))

        return await self.rank_vector(vector, limit=limit, exclude=exclude)

    async def rank_vector(
        self,
        vector: Vector | None,
        limit: int | None = None,
        exclude: set[str] | None = None,
    ) -> list[RankedCandidate]:
        """Rank candidates for an already-embedded query vector."""
        limit = settings.ranking.default_limit if limit is None else limit
        if limit <= 0:
            return []
        exclude = exclude or set()

        hits = await self._semantic_hits(vector, limit)
        best_hits: dict[str, ScoredDocument] = {}
        for hit in hits:
            if not hit.path or hit.path in exclude:
                continue
            current = best_hits.get(hit.path)
            if current is None or hit.score > current.score:
                best_hits[hit.path] = hit

        history = {
            f.path: f for f in self._interactions.ranked() if f.path not in exclude
        }
        top_relevance = max((f.relevance for f in history.values()), default=0.0)

        candidates = [
            self._blend(
                path,
                best_hits.get(path),
                history.get(path),
                top_relevance,
            )
            for path in best_hits.keys() | history.keys()
        ]
        candidates.sort(key=lambda c: (c.score, c.similarity), reverse=True)

        self._logger.debug(
            "candidates_ranked",
            semantic_hits=len(best_hits),
            tracked_paths=len(history),
            returned=min(limit, len(candidates)),
        )
        return candidates[:limit]

    @property
    def _can_search(self) -> bool:
        return (
            self._vector_store is not None
            and self._embedding_service is not None
            and self._vector_store.is_connected
        )

    async def _semantic_hits(
        self, vector: Vector | None, limit: int
    ) -> list[ScoredDocument]:
        if vector is None or self._vector_store is None:
            return []
        if not self._vector_store.is_connected:
            return []

        k = limit * max(settings.ranking.candidate_multiplier, 1)
        try:
            return await self._vector_store.query(vector, k=k)
        except Exception as e:
            self._logger.warning("semantic_query_failed", error=str(e))
            return []

    def _blend(
        self,
        path: str,
        hit: ScoredDocument | None,
        features: InteractionFeatures | None,
        top_relevance: float,
    ) -> RankedCandidate:
        similarity = float(np.clip(hit.score, 0.0, 1.0)) if hit is not None else 0.0
        interaction = (
            features.relevance / top_relevance
            if features is not None and top_relevance > 0
            else 0.0
        )
        score = (
            self._semantic_weight * similarity
            + self._interaction_weight * interaction
        )
        return RankedCandidate(
            path=path,
            score=score,
            similarity=similarity,
            interaction=interaction,
            document_id=hit.id if hit is not None else None,
            content=hit.content if hit is not None else "",
            features=features,
        )
