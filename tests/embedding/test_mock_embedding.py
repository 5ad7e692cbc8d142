"""Tests for MockEmbeddingService."""

import numpy as np

from tandem.embedding.mock import MockEmbeddingService


async def test_vectors_are_deterministic_unit_length() -> None:
    service = MockEmbeddingService(dimension=32)

    first = await service.embed("def parse(stream):")
    second = await service.embed("def parse(stream):")

    assert first.shape == (32,)
    assert first.dtype == np.float32
    np.testing.assert_array_equal(first, second)
    np.testing.assert_allclose(np.linalg.norm(first), 1.0, rtol=1e-5)


async def test_different_texts_differ() -> None:
    service = MockEmbeddingService()
    a = await service.embed("alpha")
    b = await service.embed("beta")
    assert not np.allclose(a, b)


async def test_batch_matches_single_embeddings() -> None:
    service = MockEmbeddingService(dimension=8)

    batch = await service.embed_batch(["a", "b"])

    assert len(batch) == 2
    np.testing.assert_array_equal(batch[1], await service.embed("b"))
    assert service.dimension == 8
