from __future__ import annotations

import dataclasses

import pytest

from assignment_ai import analyzer
from assignment_ai.analyzer import (
    EXTERNAL_RESOURCES_NOTE,
    analyze,
    classify_assignment_type,
    extract_external_links,
    extract_requirements,
    extract_topics,
    suggested_approach,
)
from assignment_ai.models import AssignmentType


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Please WRITE a research report", AssignmentType.WRITING),
        ("Short essay on tides", AssignmentType.WRITING),
        ("Weekly QUIZ on chapter 3", AssignmentType.QUIZ_TEST),
        ("Code a linked list", AssignmentType.PROGRAMMING),
        ("Program a calculator", AssignmentType.PROGRAMMING),
        ("Lab report on titration", AssignmentType.RESEARCH),
        ("Present your findings to the class", AssignmentType.PRESENTATION),
        ("Read chapter 4", AssignmentType.GENERAL),
        ("", AssignmentType.GENERAL),
    ],
)
def test_classify_priority_and_case(text: str, expected: AssignmentType) -> None:
    assert classify_assignment_type(text) is expected


def test_classify_quiz_beats_code() -> None:
    # "test" is checked before "code".
    assert classify_assignment_type("Unit test your code") is AssignmentType.QUIZ_TEST


def test_requirements_bullets_win_over_phrases() -> None:
    text = (
        "You must write a 5-page essay on climate change.\n"
        "- Include 3 sources\n"
        "- Must be 1500 words minimum"
    )
    assert extract_requirements(text) == ["Include 3 sources", "Must be 1500 words minimum"]


def test_requirements_mixed_bullet_markers_and_indent() -> None:
    text = "Intro line\n  • First item  \n* Second item\n-Third item\n- \nTail"
    assert extract_requirements(text) == ["First item", "Second item", "Third item"]


def test_requirements_numbered_when_no_bullets() -> None:
    text = "Steps:\n1. Gather data\n2.   Clean it\n10. Plot results"
    assert extract_requirements(text) == ["Gather data", "Clean it", "Plot results"]


def test_requirements_bullets_suppress_numbered() -> None:
    text = "1. First numbered\n- Only bullet"
    assert extract_requirements(text) == ["Only bullet"]


def test_requirements_phrase_sentences() -> None:
    text = "Read the chapter. You should cite two sources! Be creative? At least one figure is required."
    assert extract_requirements(text) == [
        "You should cite two sources",
        "At least one figure is required",
    ]


def test_requirements_fall_back_to_first_three_sentences() -> None:
    text = "Read the chapter. Think about it!  Discuss with a peer? Relax. Enjoy."
    assert extract_requirements(text) == [
        "Read the chapter",
        "Think about it",
        "Discuss with a peer",
    ]


def test_requirements_fewer_than_three_sentences() -> None:
    assert extract_requirements("Read the chapter") == ["Read the chapter"]


def test_requirements_empty_input() -> None:
    assert extract_requirements("") == []
    assert extract_requirements("  ...  ") == []


def test_topics_follow_vocabulary_order_and_cap() -> None:
    text = "evaluation of design in python with math, history and science"
    topics = extract_topics(text)
    assert topics == ["Python", "Math", "History", "Science", "Design"]


def test_topics_fallback_to_type() -> None:
    assert extract_topics("Read chapter 4") == ["General Assignment"]
    assert extract_topics("take the quiz") == ["Quiz/Test"]


def test_topics_include_climate_from_vocabulary() -> None:
    assert "Climate" in extract_topics("an essay on climate change")


@pytest.mark.parametrize(
    "text",
    ["a", "write", "python javascript programming math history science art", "zzz"],
)
def test_topics_length_bounds(text: str) -> None:
    assert 1 <= len(extract_topics(text)) <= analyzer.MAX_TOPICS


def test_external_links() -> None:
    html = (
        '<a href="https://x.test/a">x</a> <a href="#top">skip</a> '
        "<a href='https://x.test/b'>y</a>"
    )
    assert extract_external_links(html) == ["https://x.test/a", "https://x.test/b"]


def test_external_links_keep_duplicates_and_attributes() -> None:
    html = (
        '<a class="btn" href="https://x.test/a" target="_blank">1</a>'
        '<p>text</p><a title="t" href="https://x.test/a">2</a>'
    )
    assert extract_external_links(html) == ["https://x.test/a", "https://x.test/a"]


def test_external_links_none() -> None:
    assert extract_external_links("no links here") == []


def test_suggested_approach_is_numbered_per_type() -> None:
    for assignment_type in AssignmentType:
        lines = suggested_approach(assignment_type).splitlines()
        assert 5 <= len(lines) <= 6
        for idx, line in enumerate(lines, start=1):
            assert line.startswith(f"{idx}. ")
    assert suggested_approach(AssignmentType.QUIZ_TEST) != suggested_approach(
        AssignmentType.GENERAL
    )
    assert len(suggested_approach(AssignmentType.PROGRAMMING).splitlines()) == 6


def test_analyze_end_to_end() -> None:
    text = (
        "You must write a 5-page essay on climate change.\n"
        "- Include 3 sources\n"
        "- Must be 1500 words minimum\n"
        '<a href="https://example.edu/rubric">rubric</a>'
    )
    result = analyze(text)
    assert result.assignment_type is AssignmentType.WRITING
    assert result.requirements == ("Include 3 sources", "Must be 1500 words minimum")
    assert result.topics
    assert result.external_links == ("https://example.edu/rubric",)
    assert "Assignment type: Writing Assignment" in result.custom_prompt
    assert "- Include 3 sources" in result.custom_prompt
    assert "thesis statement in the introduction" in result.custom_prompt
    assert result.suggested_approach.startswith("1. Start by outlining")


def test_analyze_single_line_dashes_are_not_bullets() -> None:
    text = (
        "You must write a 5-page essay on climate change. "
        "- Include 3 sources - Must be 1500 words minimum"
    )
    result = analyze(text)
    assert result.assignment_type is AssignmentType.WRITING
    assert result.requirements == (
        "You must write a 5-page essay on climate change",
        "- Include 3 sources - Must be 1500 words minimum",
    )
    assert result.topics


def test_analyze_external_content_appends_note_only() -> None:
    text = "- Include 3 sources"
    plain = analyze(text)
    with_ext = analyze(text, "Must cite Smith 2020. Should be 2000 words.")
    assert with_ext.requirements == (*plain.requirements, EXTERNAL_RESOURCES_NOTE)
    assert with_ext.topics == plain.topics
    assert EXTERNAL_RESOURCES_NOTE not in with_ext.custom_prompt


def test_analyze_empty_external_content_still_counts() -> None:
    assert analyze("Read.", "").requirements[-1] == EXTERNAL_RESOURCES_NOTE


def test_analyze_empty_description_is_total() -> None:
    result = analyze("")
    assert result.assignment_type is AssignmentType.GENERAL
    assert result.topics == ("General Assignment",)
    assert result.requirements == ()
    assert result.external_links == ()


def test_analyze_is_deterministic_and_immutable() -> None:
    text = "Present the history of jazz music. Slides should be visual."
    first = analyze(text)
    assert analyze(text) == first
    with pytest.raises(dataclasses.FrozenInstanceError):
        first.topics = ()  # type: ignore[misc]
