import pytest

from verbum.services.personas import (
    DEFAULT_PERSONA_KEY,
    PERSONAS,
    UPCOMING_PERSONAS,
    get_persona,
    overlay,
    persona_prompt,
)
from verbum.services.prompts import BASE_SYSTEM_PROMPT, build_system_prompt
from verbum.models import GroundingContext

BASE = "Eres un asistente católico."


def test_exactly_three_personas():
    assert set(PERSONAS) == {"augustin", "teresa_avila", "francis_assisi"}
    assert DEFAULT_PERSONA_KEY in PERSONAS
    assert UPCOMING_PERSONAS not in PERSONAS


@pytest.mark.parametrize("key", ["augustin", "teresa_avila", "francis_assisi"])
def test_overlay_appends_style_block(key):
    persona = get_persona(key)

    prompt = overlay(BASE, key)

    assert prompt.startswith(BASE + "\n\n")
    assert f"**Persona: {persona.display_name}**" in prompt
    assert persona.style_card in prompt
    assert persona.notes in prompt


def test_unknown_persona_leaves_prompt_unchanged():
    assert persona_prompt("padre_pio") == ""
    assert overlay(BASE, "padre_pio") == BASE
    assert overlay(BASE, "") == BASE


def test_style_block_does_not_add_scripture():
    assert "pasajes recuperados" in persona_prompt("augustin")


def test_build_system_prompt_order():
    grounding = GroundingContext(prompt_block="BLOQUE")

    prompt = build_system_prompt(grounding, "francis_assisi")

    assert prompt.startswith(BASE_SYSTEM_PROMPT)
    assert prompt.index("San Francisco de Asís") < prompt.index("BLOQUE")
    assert prompt.endswith("\n\nBLOQUE")


def test_build_system_prompt_unknown_persona():
    grounding = GroundingContext(prompt_block="BLOQUE")

    assert build_system_prompt(grounding, "nadie") == f"{BASE_SYSTEM_PROMPT}\n\nBLOQUE"
