from __future__ import annotations

import json
import logging
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .analyzer import analyze
from .config import Settings
from .drafts import generate_draft
from .enhancer import enhance
from .models import AnalysisResult, DraftResult

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _pause(settings: Settings | None) -> None:
    # Latency stand-in for progress displays; never changes output.
    delay = settings.processing_delay_seconds if settings else 0.0
    if delay > 0:
        time.sleep(delay)


def run_analysis(
    description: str,
    external_content: str | None = None,
    settings: Settings | None = None,
) -> AnalysisResult:
    _pause(settings)
    result = analyze(description, external_content)
    logger.info(
        "analysis complete: type=%s topics=%d requirements=%d",
        result.assignment_type.value,
        len(result.topics),
        len(result.requirements),
    )
    return result


def run_draft(
    description: str,
    analysis: AnalysisResult,
    external_content: str | None = None,
    settings: Settings | None = None,
) -> DraftResult:
    _pause(settings)
    result = generate_draft(description, analysis, external_content)
    logger.info(
        "draft complete: type=%s chars=%d",
        analysis.assignment_type.value,
        len(result.content),
    )
    return result


def run_enhance(content: str, instruction: str, settings: Settings | None = None) -> str:
    _pause(settings)
    enhanced = enhance(content, instruction)
    logger.info("enhance complete: instruction=%r delta=%d", instruction, len(enhanced) - len(content))
    return enhanced


def run_pipeline(
    description: str,
    external_content: str | None = None,
    settings: Settings | None = None,
) -> tuple[AnalysisResult, DraftResult]:
    analysis = run_analysis(description, external_content, settings)
    draft = run_draft(description, analysis, external_content, settings)
    return analysis, draft


def write_artifacts(
    out_dir: Path,
    analysis: AnalysisResult,
    draft: DraftResult,
) -> dict[str, str]:
    out_dir.mkdir(parents=True, exist_ok=True)

    analysis_path = out_dir / "analysis.json"
    draft_md_path = out_dir / "draft.md"
    draft_json_path = out_dir / "draft.json"

    draft_payload: dict[str, Any] = {**draft.to_dict(), "generated_at": utc_now_iso()}

    analysis_path.write_text(json.dumps(analysis.to_dict(), indent=2, sort_keys=True))
    draft_md_path.write_text(draft.content)
    draft_json_path.write_text(json.dumps(draft_payload, indent=2, sort_keys=True))
    logger.info("wrote artifacts to %s", out_dir)

    return {
        "analysis_json": str(analysis_path),
        "draft_md": str(draft_md_path),
        "draft_json": str(draft_json_path),
    }
