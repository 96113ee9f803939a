from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import ValidationError, validate

from .models import AnalysisResult

SCHEMAS_DIR = Path(__file__).resolve().parents[2] / "schemas"
ANALYSIS_SCHEMA = "analysis_result.schema.json"
DRAFT_SCHEMA = "draft_result.schema.json"


class PayloadValidationError(ValueError):
    """Raised when a payload crossing the process boundary fails its schema."""

    def __init__(self, message: str, *, path: list[Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path or []


def load_schema(schema_name: str) -> dict[str, Any]:
    return json.loads((SCHEMAS_DIR / schema_name).read_text())


def check_payload(payload: Any, schema_name: str) -> None:
    try:
        validate(instance=payload, schema=load_schema(schema_name))
    except ValidationError as exc:
        raise PayloadValidationError(exc.message, path=list(exc.absolute_path)) from exc


def validate_analysis_payload(payload: Any) -> AnalysisResult:
    check_payload(payload, ANALYSIS_SCHEMA)
    return AnalysisResult.from_dict(payload)
