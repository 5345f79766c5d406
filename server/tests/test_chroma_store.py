import uuid

import chromadb
import pytest

from verbum.core.errors import RetrievalBackendError
from verbum.services.retriever import SimilarityRetriever
from verbum.services.verse_store import ChromaVerseStore

from conftest import make_verse


@pytest.fixture
def collection():
    client = chromadb.EphemeralClient()
    return client.get_or_create_collection(
        name=f"verses-{uuid.uuid4().hex[:8]}",
        metadata={"hnsw:space": "cosine"},
        embedding_function=None,
    )


@pytest.fixture
def verses():
    return [make_verse("psalms", 23, n, text=f"salmo {n}") for n in range(1, 4)]


def test_saved_embeddings_survive_reload(collection, verses):
    store = ChromaVerseStore(verses, collection)
    store.save_embedding("psalms-23-2", [0.0, 1.0])

    reloaded = ChromaVerseStore(verses, collection)

    assert [v.id for v in reloaded.all_verses_missing_embedding()] == [
        "psalms-23-1",
        "psalms-23-3",
    ]
    assert reloaded.get_by_reference("psalms", 23, 2).embedding == pytest.approx([0.0, 1.0])
    assert collection.count() == 1


def test_stored_metadata(collection, verses):
    ChromaVerseStore(verses, collection).save_embedding("psalms-23-1", [1.0, 0.0])

    stored = collection.get(ids=["psalms-23-1"], include=["metadatas", "documents"])

    assert stored["documents"] == ["salmo 1"]
    assert stored["metadatas"][0]["book_order"] == 23
    assert stored["metadatas"][0]["verse"] == 1


def test_retrieval_over_chroma_backed_store(collection, verses):
    store = ChromaVerseStore(verses, collection)
    store.save_embedding("psalms-23-1", [1.0, 0.0])
    store.save_embedding("psalms-23-3", [0.0, 1.0])

    matches = SimilarityRetriever(store).retrieve([1.0, 0.0], top_k=5, min_score=0.5)

    assert [m.verse_id for m in matches] == ["psalms-23-1"]


def test_unreadable_collection_raises_backend_error(verses):
    class BrokenCollection:
        def get(self, **kwargs):
            raise ConnectionError("server gone")

    with pytest.raises(RetrievalBackendError):
        ChromaVerseStore(verses, BrokenCollection())


def test_failed_write_leaves_verse_pending(collection, verses):
    store = ChromaVerseStore(verses, collection)

    class FailingCollection:
        def upsert(self, **kwargs):
            raise ConnectionError("server gone")

    store._collection = FailingCollection()

    with pytest.raises(RetrievalBackendError):
        store.save_embedding("psalms-23-1", [1.0, 0.0])
    assert len(store.all_verses_missing_embedding()) == 3
