from __future__ import annotations

import json

from assignment_ai.analyzer import analyze
from assignment_ai.drafts import generate_draft
from assignment_ai.models import AnalysisResult, AssignmentType, DraftResult


def test_parse_known_and_unknown_labels() -> None:
    assert AssignmentType.parse("Quiz/Test") is AssignmentType.QUIZ_TEST
    assert AssignmentType.parse(AssignmentType.RESEARCH) is AssignmentType.RESEARCH
    assert AssignmentType.parse("Research") is AssignmentType.GENERAL
    assert AssignmentType.parse("") is AssignmentType.GENERAL


def test_analysis_serializes_to_camel_case_json() -> None:
    result = analyze('Write about art. <a href="https://x.test/a">a</a>')
    payload = json.loads(json.dumps(result.to_dict()))
    assert set(payload) == {
        "assignmentType",
        "topics",
        "requirements",
        "suggestedApproach",
        "externalLinks",
        "customPrompt",
    }
    assert payload["assignmentType"] == "Writing Assignment"
    assert payload["externalLinks"] == ["https://x.test/a"]
    assert AnalysisResult.from_dict(payload) == result


def test_draft_omits_missing_optionals() -> None:
    assert DraftResult(content="c").to_dict() == {"content": "c"}
    full = DraftResult(content="c", citations=("x",), notes="n").to_dict()
    assert full == {"content": "c", "citations": ["x"], "notes": "n"}


def test_draft_json_shape_from_pipeline() -> None:
    analysis = analyze("Prepare a presentation on music")
    payload = generate_draft("Prepare a presentation on music", analysis, "ext").to_dict()
    assert payload["citations"] == ["External resource cited in this draft"]
    assert isinstance(payload["notes"], str)
