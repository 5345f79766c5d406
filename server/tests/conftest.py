"""
Shared fixtures for the grounding core test suite.
"""

from typing import List, Optional

import pytest

from verbum.models import Verse
from verbum.services.bible_books import get_book_by_key
from verbum.services.verse_store import InMemoryVerseStore


def make_verse(
    book: str = "genesis",
    chapter: int = 1,
    verse: int = 1,
    text: Optional[str] = None,
    embedding: Optional[List[float]] = None,
) -> Verse:
    """Build a verse with book_order taken from the canon table."""
    book_data = get_book_by_key(book)
    return Verse(
        id=f"{book}-{chapter}-{verse}",
        book=book,
        book_order=book_data.book_order,
        chapter=chapter,
        verse=verse,
        text=text or f"Texto de {book} {chapter}:{verse}",
        is_deuterocanon=book_data.is_deuterocanon,
        embedding=embedding,
    )


@pytest.fixture
def two_verse_store() -> InMemoryVerseStore:
    """Corpus of two verses with orthogonal embeddings."""
    return InMemoryVerseStore(
        [
            make_verse("genesis", 1, 1, embedding=[1.0, 0.0]),
            make_verse("genesis", 1, 2, embedding=[0.0, 1.0]),
        ]
    )


@pytest.fixture
def chapter_store() -> InMemoryVerseStore:
    """Psalm 23 verses 1-6 plus verses from other books, inserted out of order."""
    verses = [make_verse("john", 3, 16), make_verse("genesis", 1, 1)]
    verses += [make_verse("psalms", 23, n) for n in range(6, 0, -1)]
    verses.append(make_verse("psalms", 22, 1))
    return InMemoryVerseStore(verses)
