from __future__ import annotations

import json
import logging
import math
import sys
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ContextManager

import typer
from rich import print
from rich.console import Console
from rich.markup import escape

from .config import (
    CONFIG_FILE,
    Settings,
    get_processing_delay,
    llm_key_status,
    load_config,
    load_settings,
    save_llm_api_key,
    set_processing_delay,
)
from .enhancer import KNOWN_INSTRUCTIONS
from .models import AnalysisResult, DraftResult
from .validation import PayloadValidationError, validate_analysis_payload
from .workflow import run_analysis, run_draft, run_enhance, run_pipeline, write_artifacts

SCHEMA_VERSION = "v1"
FEATURE_CONTRACT_VERSION = "2026-10-v1"

ERROR_CODES = {
    "NOT_FOUND_404",
    "VALIDATION_ERROR",
    "INTERNAL_ERROR",
}

logger = logging.getLogger(__name__)

app = typer.Typer(help="Assignment analysis and draft CLI (human-in-the-loop)")
config_app = typer.Typer()
agent_app = typer.Typer()

app.add_typer(config_app, name="config")
app.add_typer(agent_app, name="agent")


@dataclass
class AppContext:
    json_mode: bool = False
    quiet: bool = False
    settings: Settings = field(default_factory=Settings)


class CliError(RuntimeError):
    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        if code not in ERROR_CODES:
            code = "INTERNAL_ERROR"
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


def _ctx_or_default(ctx: typer.Context | None) -> AppContext:
    if ctx is None or not isinstance(ctx.obj, AppContext):
        return AppContext()
    return ctx.obj


def _emit(ctx: typer.Context | None, data: dict[str, Any]) -> None:
    app_ctx = _ctx_or_default(ctx)
    if app_ctx.json_mode:
        payload = {"schema_version": SCHEMA_VERSION, **data}
        typer.echo(json.dumps(payload, sort_keys=True))
    else:
        for line in data.get("lines", []):
            print(line)


def _emit_error(ctx: typer.Context | None, err: CliError) -> None:
    app_ctx = _ctx_or_default(ctx)
    logger.warning("command failed: %s %s", err.code, err.message)
    if app_ctx.json_mode:
        payload = {
            "schema_version": SCHEMA_VERSION,
            "ok": False,
            "error": {
                "code": err.code,
                "message": err.message,
                "details": err.details,
            },
        }
        typer.echo(json.dumps(payload, sort_keys=True))
    else:
        print(f"[red]{err.code}[/red]: {escape(err.message)}")
    raise typer.Exit(code=1)


def _progress(ctx: typer.Context | None, message: str) -> ContextManager[Any]:
    app_ctx = _ctx_or_default(ctx)
    if app_ctx.json_mode or app_ctx.quiet or app_ctx.settings.processing_delay_seconds <= 0:
        return nullcontext()
    return Console(stderr=True).status(message)


def _read_file(path: Path) -> str:
    if not path.exists():
        raise CliError("NOT_FOUND_404", f"File not found: {path}", {"path": str(path)})
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise CliError("VALIDATION_ERROR", f"Could not read {path}: {exc}", {"path": str(path)}) from exc


def _resolve_text(text: str | None, file: Path | None, what: str) -> str:
    if text is not None:
        return text
    if file is not None:
        return _read_file(file)
    stdin = typer.get_text_stream("stdin")
    if not stdin.isatty():
        piped = stdin.read()
        if piped:
            return piped
    raise CliError(
        "VALIDATION_ERROR",
        f"Provide the {what} as an argument, with --file, or on stdin.",
    )


def _read_external(external_file: Path | None) -> str | None:
    return _read_file(external_file) if external_file is not None else None


def _load_analysis(path: Path) -> AnalysisResult:
    raw = _read_file(path)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CliError(
            "VALIDATION_ERROR",
            f"Analysis file is not valid JSON: {exc.msg}",
            {"path": str(path)},
        ) from exc
    try:
        return validate_analysis_payload(payload)
    except PayloadValidationError as exc:
        raise CliError(
            "VALIDATION_ERROR",
            f"Analysis file failed schema validation: {exc.message}",
            {"path": str(path), "field_path": exc.path},
        ) from exc


def _analysis_lines(analysis: AnalysisResult) -> list[str]:
    lines = [
        f"Assignment type: [bold]{escape(analysis.assignment_type.value)}[/bold]",
        f"Topics: {escape(', '.join(analysis.topics))}",
        "Requirements:",
        *[f"  - {escape(req)}" for req in analysis.requirements],
    ]
    if analysis.external_links:
        lines.append("External links:")
        lines.extend(f"  - {escape(link)}" for link in analysis.external_links)
    lines.append("Suggested approach:")
    lines.extend(f"  {escape(step)}" for step in analysis.suggested_approach.splitlines())
    return lines


def _draft_payload(
    ctx: typer.Context,
    command: str,
    analysis: AnalysisResult,
    draft: DraftResult,
    out_dir: Path | None,
) -> dict[str, Any]:
    artifacts = write_artifacts(out_dir, analysis, draft) if out_dir is not None else {}
    lines = [escape(draft.content)]
    # --quiet keeps the draft itself and drops the trailing chatter.
    if not _ctx_or_default(ctx).quiet:
        if artifacts:
            lines.append(f"[green]Artifacts written to[/green] {escape(str(out_dir))}")
        if draft.notes:
            lines.append(f"[dim]{escape(draft.notes)}[/dim]")
    return {
        "ok": True,
        "command": command,
        "result": {
            "analysis": analysis.to_dict(),
            "draft": draft.to_dict(),
            "artifacts": artifacts,
        },
        "lines": lines,
    }


@app.callback()
def main(
    ctx: typer.Context,
    json_mode: bool = typer.Option(False, "--json", help="Machine-readable JSON output."),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging on stderr."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = AppContext(json_mode=json_mode, quiet=quiet, settings=load_settings())


@app.command("analyze")
def analyze_command(
    ctx: typer.Context,
    text: str | None = typer.Argument(None, help="Assignment description (may contain HTML)."),
    file: Path | None = typer.Option(None, "--file", help="Read the description from a file."),
    external_file: Path | None = typer.Option(
        None, "--external-file", help="Pre-extracted text of a linked resource."
    ),
) -> None:
    try:
        description = _resolve_text(text, file, "assignment description")
        external = _read_external(external_file)
    except CliError as exc:
        _emit_error(ctx, exc)

    with _progress(ctx, "Analyzing assignment..."):
        analysis = run_analysis(description, external, _ctx_or_default(ctx).settings)
    _emit(
        ctx,
        {
            "ok": True,
            "command": "analyze",
            "result": {"analysis": analysis.to_dict()},
            "lines": _analysis_lines(analysis),
        },
    )


@app.command("draft")
def draft_command(
    ctx: typer.Context,
    text: str | None = typer.Argument(None, help="Assignment description (may contain HTML)."),
    file: Path | None = typer.Option(None, "--file", help="Read the description from a file."),
    analysis_file: Path | None = typer.Option(
        None, "--analysis", help="Reuse a saved analysis JSON instead of re-analyzing."
    ),
    external_file: Path | None = typer.Option(
        None, "--external-file", help="Pre-extracted text of a linked resource."
    ),
    out_dir: Path | None = typer.Option(None, "--out", help="Write draft artifacts here."),
) -> None:
    try:
        description = _resolve_text(text, file, "assignment description")
        external = _read_external(external_file)
        analysis = _load_analysis(analysis_file) if analysis_file is not None else None
    except CliError as exc:
        _emit_error(ctx, exc)

    settings = _ctx_or_default(ctx).settings
    if analysis is None:
        with _progress(ctx, "Analyzing assignment..."):
            analysis = run_analysis(description, external, settings)
    with _progress(ctx, "Generating draft..."):
        draft = run_draft(description, analysis, external, settings)
    _emit(ctx, _draft_payload(ctx, "draft", analysis, draft, out_dir))


@app.command("run")
def run_command(
    ctx: typer.Context,
    text: str | None = typer.Argument(None, help="Assignment description (may contain HTML)."),
    file: Path | None = typer.Option(None, "--file", help="Read the description from a file."),
    external_file: Path | None = typer.Option(
        None, "--external-file", help="Pre-extracted text of a linked resource."
    ),
    out_dir: Path | None = typer.Option(None, "--out", help="Write analysis and draft artifacts here."),
) -> None:
    try:
        description = _resolve_text(text, file, "assignment description")
        external = _read_external(external_file)
    except CliError as exc:
        _emit_error(ctx, exc)

    with _progress(ctx, "Analyzing assignment and generating draft..."):
        analysis, draft = run_pipeline(description, external, _ctx_or_default(ctx).settings)
    payload = _draft_payload(ctx, "run", analysis, draft, out_dir)
    payload["lines"] = [*_analysis_lines(analysis), "", *payload["lines"]]
    _emit(ctx, payload)


@app.command("enhance")
def enhance_command(
    ctx: typer.Context,
    instruction: str = typer.Option(..., "--instruction", "-i", help="e.g. 'make more concise'"),
    text: str | None = typer.Option(None, "--text", help="Content to enhance."),
    file: Path | None = typer.Option(None, "--file", help="Read the content from a file."),
    output: Path | None = typer.Option(None, "--output", help="Write the enhanced content here."),
) -> None:
    try:
        content = _resolve_text(text, file, "content")
    except CliError as exc:
        _emit_error(ctx, exc)

    with _progress(ctx, "Enhancing content..."):
        enhanced = run_enhance(content, instruction, _ctx_or_default(ctx).settings)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(enhanced)

    recognized = instruction.lower() in KNOWN_INSTRUCTIONS
    lines = [escape(enhanced)]
    if not recognized and not _ctx_or_default(ctx).quiet:
        lines.append(
            "[yellow]Unrecognized instruction;[/yellow] see `assignment-ai instructions`."
        )
    _emit(
        ctx,
        {
            "ok": True,
            "command": "enhance",
            "result": {
                "instruction": instruction,
                "content": enhanced,
                "recognized": recognized,
                "output": str(output) if output is not None else None,
            },
            "lines": lines,
        },
    )


@app.command("instructions")
def instructions_command(ctx: typer.Context) -> None:
    _emit(
        ctx,
        {
            "ok": True,
            "command": "instructions",
            "result": {"instructions": list(KNOWN_INSTRUCTIONS)},
            "lines": [f"- {item}" for item in KNOWN_INSTRUCTIONS],
        },
    )


@config_app.command("status")
def config_status(ctx: typer.Context) -> None:
    config = load_config()
    status = llm_key_status(config)
    delay = get_processing_delay(config)
    provider = status["provider"] or "not configured"
    _emit(
        ctx,
        {
            "ok": True,
            "command": "config.status",
            "result": {
                "config_path": str(CONFIG_FILE),
                "llm": status,
                "processing_delay_seconds": delay,
            },
            "lines": [
                f"Config: {CONFIG_FILE}",
                f"LLM key: {'configured' if status['is_set'] else 'not configured'} ({provider})",
                f"Processing delay: {delay}s",
            ],
        },
    )


@config_app.command("set-key")
def config_set_key(
    ctx: typer.Context,
    key: str = typer.Option(..., "--key", prompt=True, hide_input=True),
) -> None:
    if not key.strip():
        _emit_error(ctx, CliError("VALIDATION_ERROR", "API key cannot be empty"))
    path = save_llm_api_key(key)
    _emit(
        ctx,
        {
            "ok": True,
            "command": "config.set-key",
            "result": {"config_path": str(path), "llm": llm_key_status()},
            "lines": [f"[green]API key saved to[/green] {path}"],
        },
    )


@config_app.command("set-delay")
def config_set_delay(
    ctx: typer.Context,
    seconds: float = typer.Argument(..., min=0.0, help="Simulated processing delay."),
) -> None:
    if not math.isfinite(seconds):
        _emit_error(
            ctx,
            CliError(
                "VALIDATION_ERROR",
                f"Processing delay must be a finite number of seconds, got {seconds}",
                {"seconds": str(seconds)},
            ),
        )
    path = set_processing_delay(seconds)
    _emit(
        ctx,
        {
            "ok": True,
            "command": "config.set-delay",
            "result": {"config_path": str(path), "processing_delay_seconds": seconds},
            "lines": [f"Processing delay set to [bold]{seconds}s[/bold] ([dim]{path}[/dim])"],
        },
    )


@agent_app.command("capabilities")
def agent_capabilities(ctx: typer.Context) -> None:
    capabilities = {
        "commands": [
            {"name": "analyze", "reads": ["input"], "writes": []},
            {"name": "draft", "reads": ["input"], "writes": ["local:artifacts"]},
            {"name": "run", "reads": ["input"], "writes": ["local:artifacts"]},
            {"name": "enhance", "reads": ["input"], "writes": ["local:file"]},
            {"name": "instructions", "reads": [], "writes": []},
            {"name": "config.status", "reads": ["local:config"], "writes": []},
            {"name": "config.set-key", "reads": [], "writes": ["local:config"]},
            {"name": "config.set-delay", "reads": [], "writes": ["local:config"]},
        ],
        "feature_contract_version": FEATURE_CONTRACT_VERSION,
    }
    _emit(
        ctx,
        {
            "ok": True,
            "command": "agent.capabilities",
            "result": capabilities,
            "lines": ["Use --json for machine-readable capabilities."],
        },
    )


if __name__ == "__main__":
    app()
