"""
Grounding Context Assembler.

Turns retrieved verses into the text block injected into the generation
prompt. The generator decides whether the verses are relevant; this module
only supplies the material and the constraint.
"""

from typing import List, Sequence, Tuple, Union

from verbum.models import (
    DegradedEmpty,
    GroundingContext,
    RetrievalMatch,
    RetrievalOutcome,
    Verse,
    VerseRef,
)
from verbum.services.bible_books import format_reference

GROUNDING_HEADER = (
    "Versículos recuperados de la Biblia Católica para fundamentar tu respuesta:"
)
GROUNDING_FOOTER = (
    "Usa SOLO estos versículos para apoyar tu respuesta. Si ninguno es relevante, "
    "haz una pregunta aclaratoria o sugiere leer un pasaje general sin citar "
    "específicamente."
)
NO_MATCHES_BLOCK = (
    "No se encontraron versículos específicos para esta consulta. Haz una pregunta "
    "aclaratoria o sugiere un pasaje general de la Biblia sin citar versículos "
    "específicos."
)

MatchLike = Union[RetrievalMatch, Tuple[Verse, float]]


def _as_verse(match: MatchLike) -> Verse:
    if isinstance(match, RetrievalMatch):
        return match.verse
    verse, _score = match
    return verse


def _to_ref(verse: Verse) -> VerseRef:
    return VerseRef(
        book=verse.book,
        chapter=verse.chapter,
        verse=verse.verse,
        text=verse.text,
        reference=format_reference(verse.book, verse.chapter, verse.verse),
    )


def assemble(matches: Sequence[MatchLike]) -> GroundingContext:
    """Render matches, in the given order, into a grounding block."""
    if not matches:
        return GroundingContext(prompt_block=NO_MATCHES_BLOCK, refs=[])

    refs: List[VerseRef] = [_to_ref(_as_verse(m)) for m in matches]
    lines = [f'{i}. {ref.reference}: "{ref.text}"' for i, ref in enumerate(refs, start=1)]

    prompt_block = "\n\n".join([GROUNDING_HEADER, "\n".join(lines), GROUNDING_FOOTER])
    return GroundingContext(prompt_block=prompt_block, refs=refs)


def assemble_outcome(outcome: RetrievalOutcome) -> GroundingContext:
    # A degraded retrieval is grounded exactly like an empty one.
    if isinstance(outcome, DegradedEmpty):
        return assemble([])
    return assemble(outcome.matches)


def assemble_daily(verse: Verse, context: Sequence[Verse] = ()) -> GroundingContext:
    """Build the reflection request for the verse of the day."""
    reference = format_reference(verse.book, verse.chapter, verse.verse)
    parts = [f'Versículo del día:\n\n{reference}: "{verse.text}"']

    neighbours = [v for v in context if v.id != verse.id]
    if neighbours:
        context_lines = "\n".join(
            f'{format_reference(v.book, v.chapter, v.verse)}: "{v.text}"'
            for v in neighbours
        )
        parts.append(f"Contexto del pasaje:\n{context_lines}")

    parts.append(
        "Escribe una breve reflexión pastoral (2-3 oraciones) que ayude a aplicar "
        "este versículo a la vida cotidiana."
    )
    return GroundingContext(prompt_block="\n\n".join(parts), refs=[_to_ref(verse)])
