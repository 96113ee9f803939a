from __future__ import annotations

import pytest

from assignment_ai.enhancer import (
    EXTENDED_ANALYSIS,
    IMPLEMENTATION_DETAILS,
    KNOWN_INSTRUCTIONS,
    REFERENCES,
    enhance,
)


def test_improve_writing_quality() -> None:
    out = enhance("This is very good but big.", "improve writing quality")
    assert out == "This is significantly excellent however substantial."


def test_improve_writing_replacements_chain_in_order() -> None:
    assert enhance("She uses it to make it.", "Improve Writing Quality") == (
        "She utilizes it to develop it."
    )


def test_fix_grammar_and_spelling() -> None:
    text = "i dont think its right, there is alot wrong and youre late."
    assert enhance(text, "fix grammar and spelling") == (
        "I don't think it's right, their is a lot wrong and you're late."
    )


@pytest.mark.parametrize(
    "text",
    [
        "i dont know. Im sure its fine and there cant be alot wrong; thier youre wasnt didnt wont",
        "Nothing to change here.",
        "",
    ],
)
def test_fix_grammar_is_idempotent(text: str) -> None:
    once = enhance(text, "fix grammar and spelling")
    assert enhance(once, "fix grammar and spelling") == once


def test_replacements_are_case_sensitive() -> None:
    assert enhance("VERY Good", "improve writing quality") == "VERY Good"


def test_make_more_concise() -> None:
    text = "In summary, in order to win, due to the fact that we can. needless to say it works."
    assert enhance(text, "make more concise") == (
        "In summary, to win, because we can.  it works."
    )


def test_expand_picks_block_by_content() -> None:
    code_text = "The function returns a list."
    assert enhance(code_text, "expand with more details") == code_text + IMPLEMENTATION_DETAILS

    prose = "The war changed the region."
    assert enhance(prose, "expand with more details") == prose + EXTENDED_ANALYSIS


def test_add_academic_citations() -> None:
    out = enhance("Body.", "add academic citations")
    assert out == "Body." + REFERENCES
    assert "## References" in out


def test_unrecognized_instruction_is_annotated() -> None:
    out = enhance("Body.", "make it rhyme")
    assert out == 'Body.\n\n*This content has been enhanced based on the instruction: "make it rhyme"*'


def test_instruction_match_is_exact() -> None:
    out = enhance("very", " improve writing quality ")
    assert out.startswith("very\n\n*This content has been enhanced")


def test_known_instructions_all_handled() -> None:
    for instruction in KNOWN_INSTRUCTIONS:
        assert "This content has been enhanced" not in enhance("text", instruction)
