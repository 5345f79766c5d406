from verbum.models import DegradedEmpty, Matches, RetrievalMatch
from verbum.services.grounding import (
    GROUNDING_FOOTER,
    GROUNDING_HEADER,
    NO_MATCHES_BLOCK,
    assemble,
    assemble_daily,
    assemble_outcome,
)

from conftest import make_verse


def test_renders_numbered_references_in_given_order():
    first = make_verse("john", 3, 16, text="Porque tanto amó Dios al mundo")
    second = make_verse("genesis", 1, 1, text="En el principio creó Dios")

    context = assemble([(first, 0.91), (second, 0.80)])

    assert context.prompt_block == (
        f"{GROUNDING_HEADER}\n\n"
        '1. Juan 3:16: "Porque tanto amó Dios al mundo"\n'
        '2. Génesis 1:1: "En el principio creó Dios"\n\n'
        f"{GROUNDING_FOOTER}"
    )
    assert [ref.reference for ref in context.refs] == ["Juan 3:16", "Génesis 1:1"]
    assert context.refs[0].text == "Porque tanto amó Dios al mundo"


def test_accepts_retrieval_matches():
    verse = make_verse("psalms", 23, 1, text="El Señor es mi pastor")
    match = RetrievalMatch(verse=verse, similarity_score=0.88, canonical_index=4)

    context = assemble([match])

    assert '1. Salmos 23:1: "El Señor es mi pastor"' in context.prompt_block
    assert "SOLO" in context.prompt_block


def test_unknown_book_key_is_rendered_raw():
    verse = make_verse("genesis", 1, 1).model_copy(update={"book": "xyz"})

    assert assemble([(verse, 0.9)]).refs[0].reference == "xyz 1:1"


def test_empty_matches_give_fixed_block():
    first = assemble([])
    second = assemble(())

    assert first.prompt_block == NO_MATCHES_BLOCK
    assert second.prompt_block == first.prompt_block
    assert first.refs == []


def test_degraded_outcome_grounds_like_no_matches():
    degraded = assemble_outcome(DegradedEmpty(reason="timeout"))

    assert degraded == assemble([])
    assert assemble_outcome(Matches(matches=[])) == assemble([])


def test_daily_block_lists_neighbours_but_not_the_verse_twice():
    verse = make_verse("psalms", 23, 2, text="verde")
    context = [
        make_verse("psalms", 23, 1, text="pastor"),
        verse,
        make_verse("psalms", 23, 3, text="alma"),
    ]

    grounding = assemble_daily(verse, context)

    assert grounding.prompt_block.startswith('Versículo del día:\n\nSalmos 23:2: "verde"')
    assert 'Salmos 23:1: "pastor"' in grounding.prompt_block
    assert 'Salmos 23:3: "alma"' in grounding.prompt_block
    assert grounding.prompt_block.count("Salmos 23:2") == 1
    assert [ref.reference for ref in grounding.refs] == ["Salmos 23:2"]


def test_daily_block_without_context():
    grounding = assemble_daily(make_verse("john", 14, 27, text="La paz os dejo"))

    assert "Contexto del pasaje" not in grounding.prompt_block
    assert "reflexión pastoral" in grounding.prompt_block
