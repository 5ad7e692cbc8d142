"""Tests for InMemoryVectorStore."""

import numpy as np
import pytest

from tandem.storage.base import Document, NotConnectedError
from tandem.storage.memory import InMemoryVectorStore


def vec(*values: float) -> np.ndarray:
    return np.array(values, dtype=np.float32)


@pytest.fixture
async def store() -> InMemoryVectorStore:
    store = InMemoryVectorStore(dimension=3)
    await store.connect()
    return store


class TestInMemoryVectorStore:
    async def test_requires_connect(self) -> None:
        store = InMemoryVectorStore(dimension=3)
        assert not store.is_connected
        with pytest.raises(NotConnectedError):
            await store.query(vec(1, 0, 0))

    async def test_query_orders_by_cosine(self, store: InMemoryVectorStore) -> None:
        await store.upsert(Document("a", "/a.py", vec(1, 0, 0), content="alpha"))
        await store.upsert(Document("b", "/b.py", vec(0, 1, 0)))
        await store.upsert(Document("c", "/c.py", vec(1, 1, 0)))

        results = await store.query(vec(1, 0, 0), k=2)

        assert [r.id for r in results] == ["a", "c"]
        assert results[0].score == pytest.approx(1.0)
        assert results[0].content == "alpha"
        assert results[1].score == pytest.approx(1 / np.sqrt(2))

    async def test_upsert_replaces(self, store: InMemoryVectorStore) -> None:
        await store.upsert(Document("a", "/a.py", vec(1, 0, 0)))
        await store.upsert(Document("a", "/a.py", vec(0, 1, 0)))

        assert await store.count() == 1
        results = await store.query(vec(0, 1, 0), k=1)
        assert results[0].score == pytest.approx(1.0)

    async def test_dimension_mismatch(self, store: InMemoryVectorStore) -> None:
        with pytest.raises(ValueError, match="does not match"):
            await store.upsert(Document("a", "/a.py", vec(1, 0)))

    async def test_zero_vector_scores_zero(self, store: InMemoryVectorStore) -> None:
        await store.upsert(Document("a", "/a.py", vec(1, 0, 0)))
        results = await store.query(vec(0, 0, 0))
        assert results[0].score == 0.0

    async def test_delete(self, store: InMemoryVectorStore) -> None:
        await store.upsert(Document("a", "/a.py", vec(1, 0, 0)))
        await store.delete("a")
        await store.delete("missing")
        assert await store.count() == 0

    async def test_empty_and_non_positive_k(self, store: InMemoryVectorStore) -> None:
        assert await store.query(vec(1, 0, 0)) == []
        await store.upsert(Document("a", "/a.py", vec(1, 0, 0)))
        assert await store.query(vec(1, 0, 0), k=0) == []

    async def test_upsert_copies_vector(self, store: InMemoryVectorStore) -> None:
        vector = vec(1, 0, 0)
        await store.upsert(Document("a", "/a.py", vector))
        vector[:] = vec(0, 1, 0)

        results = await store.query(vec(1, 0, 0), k=1)
        np.testing.assert_allclose(results[0].score, 1.0, rtol=1e-6)
