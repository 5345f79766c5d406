"""
Deterministic verse-of-day selection.

A date string is hashed with 32-bit signed wraparound arithmetic over its
UTF-16 code units, then reduced modulo the corpus size. Same date and same
corpus size always give the same canonical index.
"""

import datetime
import re
import time
from typing import Callable, Dict, Hashable, Optional, Tuple

from verbum.core.config import settings
from verbum.core.errors import EmptyCorpusError
from verbum.core.log_config import get_logger
from verbum.models import DailyVerse
from verbum.services.bible_books import format_reference
from verbum.services.grounding import assemble_daily
from verbum.services.prompts import REFLECTION_SYSTEM_PROMPT
from verbum.services.verse_store import VerseStore

logger = get_logger(__name__)

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _utf16_code_units(text: str):
    encoded = text.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        yield int.from_bytes(encoded[i : i + 2], "little")


def hash_date(date_string: str) -> int:
    """Signed 32-bit hash: h = h * 31 + code_unit, wrapped at every step."""
    h = 0
    for code_unit in _utf16_code_units(date_string):
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def select_for_date(date_string: str, total_verse_count: int) -> int:
    """Map a date string to a canonical index in [0, total_verse_count)."""
    if total_verse_count <= 0:
        raise EmptyCorpusError()
    return abs(hash_date(date_string)) % total_verse_count


class TTLCache:
    """Small TTL cache with an injectable clock.

    Expired entries are dropped on every write, and at most `maxsize` entries
    are kept; the one closest to expiry goes first.
    """

    def __init__(
        self,
        ttl: float,
        maxsize: int = 64,
        clock: Callable[[], float] = time.monotonic,
    ):
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1, got {maxsize}")
        self.ttl = ttl
        self.maxsize = maxsize
        self.clock = clock
        self._items: Dict[Hashable, Tuple[float, object]] = {}

    def get(self, key: Hashable):
        item = self._items.get(key)
        if item is None:
            return None
        expires_at, value = item
        if self.clock() >= expires_at:
            self._items.pop(key, None)
            return None
        return value

    def set(self, key: Hashable, value) -> None:
        now = self.clock()
        for stale in [k for k, (expires_at, _) in self._items.items() if now >= expires_at]:
            self._items.pop(stale, None)

        self._items.pop(key, None)
        while len(self._items) >= self.maxsize:
            oldest = min(self._items, key=lambda k: self._items[k][0])
            self._items.pop(oldest, None)

        self._items[key] = (now + self.ttl, value)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class VerseOfDayService:
    def __init__(
        self,
        store: VerseStore,
        cache: Optional[TTLCache] = None,
        radius: Optional[int] = None,
        today: Optional[Callable[[], datetime.date]] = None,
    ):
        self.store = store
        self.cache = cache
        self.radius = radius if radius is not None else settings.CONTEXT_RADIUS
        self.today = today or (lambda: datetime.datetime.now(datetime.timezone.utc).date())

    def for_date(self, date_string: Optional[str] = None) -> DailyVerse:
        """Select the verse for `date_string` (YYYY-MM-DD, default today in UTC)."""
        if date_string is None:
            date_string = self.today().isoformat()
        if not _DATE_PATTERN.match(date_string):
            raise ValueError(f"Expected a YYYY-MM-DD date, got {date_string!r}")
        day = datetime.datetime.strptime(date_string, "%Y-%m-%d").date()

        count = self.store.count_all()
        cache_key = (date_string, count)
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        index = select_for_date(date_string, count)
        verse = self.store.get_by_canonical_index(index)
        context = self.store.context_window(
            verse.book, verse.chapter, verse.verse, self.radius
        )
        logger.info(
            "Verse of day %s -> index %d of %d (%s %d:%d)",
            date_string,
            index,
            count,
            verse.book,
            verse.chapter,
            verse.verse,
        )

        daily = DailyVerse(
            date=day,
            canonical_index=index,
            verse=verse,
            reference=format_reference(verse.book, verse.chapter, verse.verse),
            context=context,
            grounding=assemble_daily(verse, context),
            system_prompt=REFLECTION_SYSTEM_PROMPT,
        )
        if self.cache is not None:
            self.cache.set(cache_key, daily)
        return daily
