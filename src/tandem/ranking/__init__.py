"""Relevance ranking of retrieval context."""

from .models import RankedCandidate
from .ranker import RelevanceRanker

__all__ = ["RankedCandidate", "RelevanceRanker"]
