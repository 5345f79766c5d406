"""
Similarity Retriever.

Exact brute-force cosine search over every embedded verse. The corpus is
static and small enough that an O(N) scan per query is fine.
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from verbum.core.config import settings
from verbum.core.errors import RetrievalBackendError
from verbum.core.log_config import get_logger
from verbum.models import DegradedEmpty, Matches, RetrievalMatch, RetrievalOutcome, Verse
from verbum.services.verse_store import VerseStore

logger = get_logger(__name__)


class _Snapshot(NamedTuple):
    revision: int
    entries: List[Tuple[int, Verse]]
    matrix: np.ndarray
    norms: np.ndarray


class SimilarityRetriever:
    def __init__(
        self,
        store: VerseStore,
        top_k: Optional[int] = None,
        min_score: Optional[float] = None,
    ):
        self.store = store
        self.top_k = top_k if top_k is not None else settings.RAG_TOP_K
        self.min_score = min_score if min_score is not None else settings.RAG_MIN_SCORE
        self._snapshot: Optional[_Snapshot] = None

    def _current_snapshot(self) -> _Snapshot:
        # Published with one assignment; a reader only ever holds a single revision.
        revision = self.store.revision
        snapshot = self._snapshot
        if snapshot is not None and snapshot.revision == revision:
            return snapshot

        entries = self.store.embedded_verses()
        if entries:
            try:
                matrix = np.asarray([v.embedding for _, v in entries], dtype=np.float64)
            except ValueError as e:
                raise RetrievalBackendError(
                    "Stored embeddings do not share a single dimension"
                ) from e
            norms = np.linalg.norm(matrix, axis=1)
        else:
            matrix = np.zeros((0, 0), dtype=np.float64)
            norms = np.zeros(0, dtype=np.float64)

        snapshot = _Snapshot(revision, entries, matrix, norms)
        self._snapshot = snapshot
        return snapshot

    def retrieve(
        self,
        query_vector: Sequence[float],
        top_k: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> List[RetrievalMatch]:
        """Return up to `top_k` verses scoring at least `min_score`.

        Ordered by score descending, ties broken by canonical index ascending.
        Vectors with zero magnitude score 0.0. An empty list is a valid
        result, not an error.
        """
        top_k = self.top_k if top_k is None else top_k
        min_score = self.min_score if min_score is None else min_score
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")

        snapshot = self._current_snapshot()
        if not snapshot.entries:
            return []

        query = np.asarray(query_vector, dtype=np.float64)
        dimension = snapshot.matrix.shape[1]
        if query.ndim != 1 or query.shape[0] != dimension:
            raise ValueError(
                f"Query dimension {query.shape} does not match corpus dimension {dimension}"
            )

        denominators = snapshot.norms * np.linalg.norm(query)
        dots = snapshot.matrix @ query
        scores = np.divide(
            dots, denominators, out=np.zeros_like(dots), where=denominators != 0
        )

        candidates = [
            (float(score), index, verse)
            for score, (index, verse) in zip(scores, snapshot.entries)
            if score >= min_score
        ]
        candidates.sort(key=lambda c: (-c[0], c[1]))

        return [
            RetrievalMatch(verse=verse, similarity_score=score, canonical_index=index)
            for score, index, verse in candidates[:top_k]
        ]

    def retrieve_outcome(
        self,
        query_vector: Sequence[float],
        top_k: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> RetrievalOutcome:
        """Like retrieve(), but a backend failure degrades to an empty outcome."""
        try:
            matches = self.retrieve(query_vector, top_k=top_k, min_score=min_score)
        except RetrievalBackendError as e:
            logger.warning("Retrieval degraded to no matches: %s", e)
            return DegradedEmpty(reason=str(e))
        return Matches(matches=matches)
