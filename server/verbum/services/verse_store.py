"""
Verse Corpus Store.

Holds every verse's text and embedding, addressable by id, by reference and by
canonical index (0-based position in ORDER BY book_order, chapter, verse).
The corpus is static in steady state; the only mutation is filling a missing
embedding during backfill.
"""

import json
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import chromadb
from chromadb.config import Settings as ChromaSettings

from verbum.core.config import settings
from verbum.core.errors import RetrievalBackendError, VerseNotFoundError
from verbum.core.log_config import get_logger
from verbum.models import Verse
from verbum.services.bible_books import get_book_by_key

logger = get_logger(__name__)


class VerseStore:
    """Base interface shared by the store implementations."""

    @property
    def revision(self) -> int:
        raise NotImplementedError

    def all_verses_missing_embedding(self) -> List[Verse]:
        raise NotImplementedError

    def get_by_canonical_index(self, index: int) -> Verse:
        raise NotImplementedError

    def get_by_reference(self, book: str, chapter: int, verse: int) -> Optional[Verse]:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def context_window(
        self, book: str, chapter: int, center_verse: int, radius: int
    ) -> List[Verse]:
        raise NotImplementedError

    def embedded_verses(self) -> List[Tuple[int, Verse]]:
        raise NotImplementedError

    def save_embedding(self, verse_id: str, embedding: List[float]) -> Verse:
        raise NotImplementedError


class InMemoryVerseStore(VerseStore):
    """Verse store holding the whole corpus in canonical order."""

    def __init__(self, verses: Iterable[Verse] = ()):
        ordered = sorted(verses, key=lambda v: v.canonical_key)
        _validate_corpus(ordered)

        self._verses: List[Verse] = ordered
        self._index_by_id: Dict[str, int] = {v.id: i for i, v in enumerate(ordered)}
        self._index_by_ref: Dict[Tuple[str, int, int], int] = {
            (v.book, v.chapter, v.verse): i for i, v in enumerate(ordered)
        }
        self._revision = 0
        # Backfill may save from worker threads while queries read.
        self._lock = threading.Lock()

    @property
    def revision(self) -> int:
        return self._revision

    def all_verses_missing_embedding(self) -> List[Verse]:
        return [v for v in self._verses if v.embedding is None]

    def get_by_canonical_index(self, index: int) -> Verse:
        if index < 0 or index >= len(self._verses):
            raise VerseNotFoundError(
                "Canonical index out of range",
                details={"index": index, "count": len(self._verses)},
            )
        return self._verses[index]

    def get_by_id(self, verse_id: str) -> Verse:
        try:
            return self._verses[self._index_by_id[verse_id]]
        except KeyError:
            raise VerseNotFoundError(
                "Unknown verse id", details={"verse_id": verse_id}
            ) from None

    def get_by_reference(self, book: str, chapter: int, verse: int) -> Optional[Verse]:
        index = self._index_by_ref.get((book, chapter, verse))
        return self._verses[index] if index is not None else None

    def count_all(self) -> int:
        return len(self._verses)

    def context_window(
        self, book: str, chapter: int, center_verse: int, radius: int
    ) -> List[Verse]:
        low = max(1, center_verse - radius)
        high = center_verse + radius
        window = [
            v
            for v in self._verses
            if v.book == book and v.chapter == chapter and low <= v.verse <= high
        ]
        return sorted(window, key=lambda v: v.verse)

    def embedded_verses(self) -> List[Tuple[int, Verse]]:
        with self._lock:
            return [(i, v) for i, v in enumerate(self._verses) if v.embedding is not None]

    def save_embedding(self, verse_id: str, embedding: List[float]) -> Verse:
        with self._lock:
            updated = self.get_by_id(verse_id).with_embedding(embedding)
            self._verses[self._index_by_id[verse_id]] = updated
            self._revision += 1
        return updated


class ChromaVerseStore(InMemoryVerseStore):
    """Verse store whose embeddings persist in a ChromaDB collection.

    Verse records come from the corpus file; vectors live in Chroma keyed by
    verse id and are merged back in on load, so a restarted backfill only
    targets verses that are still missing.
    """

    def __init__(self, verses: Iterable[Verse], collection):
        self._collection = collection
        super().__init__(_merge_embeddings(list(verses), collection))

    @classmethod
    def open(
        cls,
        verses: Iterable[Verse],
        persist_dir: Optional[str] = None,
        collection_name: Optional[str] = None,
    ) -> "ChromaVerseStore":
        """Open (or create) the persistent collection for `verses`."""
        try:
            client = chromadb.PersistentClient(
                path=persist_dir or settings.CHROMA_PERSIST_DIR,
                settings=ChromaSettings(anonymized_telemetry=False),
            )
            collection = client.get_or_create_collection(
                name=collection_name or settings.COLLECTION_NAME,
                metadata={"hnsw:space": "cosine"},
                embedding_function=None,
            )
        except Exception as e:
            raise RetrievalBackendError(f"Could not open vector store: {e}") from e
        return cls(verses, collection)

    def save_embedding(self, verse_id: str, embedding: List[float]) -> Verse:
        verse = self.get_by_id(verse_id)
        if verse.embedding is not None:
            raise ValueError(f"Verse {verse_id} already has an embedding")

        try:
            self._collection.upsert(
                ids=[verse.id],
                embeddings=[[float(x) for x in embedding]],
                documents=[verse.text],
                metadatas=[
                    {
                        "book": verse.book,
                        "book_order": verse.book_order,
                        "chapter": verse.chapter,
                        "verse": verse.verse,
                        "is_deuterocanon": verse.is_deuterocanon,
                    }
                ],
            )
        except Exception as e:
            raise RetrievalBackendError(
                f"Could not store embedding: {e}", details={"verse_id": verse_id}
            ) from e

        return super().save_embedding(verse_id, embedding)


def _merge_embeddings(verses: List[Verse], collection) -> List[Verse]:
    try:
        stored = collection.get(include=["embeddings"])
    except Exception as e:
        raise RetrievalBackendError(f"Could not read vector store: {e}") from e

    ids = stored.get("ids") or []
    embeddings = stored.get("embeddings")
    if embeddings is None:
        embeddings = []
    vectors = {
        verse_id: [float(x) for x in embedding]
        for verse_id, embedding in zip(ids, embeddings)
        if embedding is not None
    }
    logger.info("Loaded %d stored embeddings for %d verses", len(vectors), len(verses))

    return [
        v.with_embedding(vectors[v.id]) if v.embedding is None and v.id in vectors else v
        for v in verses
    ]


def _validate_corpus(ordered: List[Verse]) -> None:
    seen_refs = set()
    seen_ids = set()
    order_by_book: Dict[str, int] = {}
    book_by_order: Dict[int, str] = {}

    for v in ordered:
        ref = (v.book, v.chapter, v.verse)
        if ref in seen_refs:
            raise ValueError(f"Duplicate verse reference: {v.book} {v.chapter}:{v.verse}")
        if v.id in seen_ids:
            raise ValueError(f"Duplicate verse id: {v.id}")
        seen_refs.add(ref)
        seen_ids.add(v.id)

        if order_by_book.setdefault(v.book, v.book_order) != v.book_order:
            raise ValueError(f"Book {v.book} has inconsistent book_order values")
        if book_by_order.setdefault(v.book_order, v.book) != v.book:
            raise ValueError(f"book_order {v.book_order} is shared by several books")


def load_corpus(path: Optional[str] = None) -> List[Verse]:
    """Load verses from a JSON array.

    Each object needs book, chapter, verse and text. book_order and
    is_deuterocanon default from the canon table; id defaults to
    "<book>-<chapter>-<verse>".
    """
    corpus_path = Path(path or settings.VERSE_CORPUS_PATH)
    with corpus_path.open("r", encoding="utf-8") as f:
        records = json.load(f)

    verses = []
    for record in records:
        book = get_book_by_key(record["book"])
        if "book_order" not in record and book is None:
            raise ValueError(f"Unknown book without book_order: {record['book']}")

        verses.append(
            Verse(
                id=str(
                    record.get("id")
                    or f"{record['book']}-{record['chapter']}-{record['verse']}"
                ),
                book=record["book"],
                book_order=record.get("book_order", book.book_order if book else 0),
                chapter=record["chapter"],
                verse=record["verse"],
                text=record["text"],
                is_deuterocanon=record.get(
                    "is_deuterocanon", book.is_deuterocanon if book else False
                ),
                embedding=record.get("embedding"),
            )
        )

    logger.info("Loaded %d verses from %s", len(verses), corpus_path)
    return verses
