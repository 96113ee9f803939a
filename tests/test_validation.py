from __future__ import annotations

import json

import pytest

from assignment_ai.analyzer import analyze
from assignment_ai.drafts import generate_draft
from assignment_ai.models import AssignmentType
from assignment_ai.validation import (
    ANALYSIS_SCHEMA,
    DRAFT_SCHEMA,
    SCHEMAS_DIR,
    PayloadValidationError,
    check_payload,
    validate_analysis_payload,
)


def test_all_schema_files_are_valid_json() -> None:
    files = sorted(SCHEMAS_DIR.glob("*.schema.json"))
    assert files
    for path in files:
        assert isinstance(json.loads(path.read_text()), dict), path.name


def test_analysis_payload_roundtrip() -> None:
    result = analyze("Research the economics of sport. You must use 5 sources.")
    assert validate_analysis_payload(result.to_dict()) == result


def test_analysis_payload_missing_field() -> None:
    payload = analyze("Write a poem").to_dict()
    del payload["customPrompt"]
    with pytest.raises(PayloadValidationError) as exc:
        validate_analysis_payload(payload)
    assert "customPrompt" in exc.value.message


def test_analysis_payload_wrong_type_reports_path() -> None:
    payload = analyze("Write a poem").to_dict()
    payload["topics"] = ["ok", 3]
    with pytest.raises(PayloadValidationError) as exc:
        validate_analysis_payload(payload)
    assert exc.value.path == ["topics", 1]


def test_unknown_type_label_is_accepted() -> None:
    payload = analyze("Write a poem").to_dict()
    payload["assignmentType"] = "Portfolio"
    assert validate_analysis_payload(payload).assignment_type is AssignmentType.GENERAL


def test_draft_payload_matches_schema() -> None:
    analysis = analyze("Write a poem")
    check_payload(generate_draft("Write a poem", analysis).to_dict(), DRAFT_SCHEMA)
    check_payload(generate_draft("Write a poem", analysis, "e").to_dict(), DRAFT_SCHEMA)
    check_payload(analysis.to_dict(), ANALYSIS_SCHEMA)
