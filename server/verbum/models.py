"""
Data models for verses, retrieval results and grounding envelopes.
"""

import datetime
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Verse(BaseModel):
    """A single verse of the corpus. Immutable apart from filling a missing embedding."""

    model_config = ConfigDict(frozen=True)

    id: str
    book: str
    book_order: int = Field(ge=1)
    chapter: int = Field(ge=1)
    verse: int = Field(ge=1)
    text: str
    is_deuterocanon: bool = False
    embedding: Optional[List[float]] = None

    @property
    def canonical_key(self) -> Tuple[int, int, int]:
        return (self.book_order, self.chapter, self.verse)

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    def with_embedding(self, embedding: List[float]) -> "Verse":
        """Return a copy carrying `embedding`. Existing vectors are never replaced."""
        if self.embedding is not None:
            raise ValueError(f"Verse {self.id} already has an embedding")
        return self.model_copy(update={"embedding": [float(x) for x in embedding]})


class VerseRef(BaseModel):
    """Reference to a verse handed to the generator, kept for audit."""

    book: str
    chapter: int
    verse: int
    text: str
    reference: str


class RetrievalMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    verse: Verse
    similarity_score: float
    canonical_index: int

    @property
    def verse_id(self) -> str:
        return self.verse.id


class Matches(BaseModel):
    kind: Literal["matches"] = "matches"
    matches: List[RetrievalMatch] = Field(default_factory=list)


class DegradedEmpty(BaseModel):
    """Retrieval could not run; the caller continues with an empty grounding block."""

    kind: Literal["degraded"] = "degraded"
    reason: str


RetrievalOutcome = Union[Matches, DegradedEmpty]


class GroundingContext(BaseModel):
    prompt_block: str
    refs: List[VerseRef] = Field(default_factory=list)


class GroundedPrompt(BaseModel):
    question: str
    system_prompt: str
    grounding: GroundingContext
    outcome: RetrievalOutcome = Field(discriminator="kind")


class DailyVerse(BaseModel):
    date: datetime.date
    canonical_index: int
    verse: Verse
    reference: str
    context: List[Verse] = Field(default_factory=list)
    grounding: GroundingContext
    # System prompt for the reflection; grounding.prompt_block is the user turn.
    system_prompt: str


class BackfillReport(BaseModel):
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    batches: int = 0
    failed_ids: List[str] = Field(default_factory=list)
    stopped_early: bool = False
