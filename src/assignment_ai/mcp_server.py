from __future__ import annotations

import json
import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Any

from jsonschema import ValidationError, validate
from mcp.server.fastmcp import FastMCP

from . import __version__ as CLI_VERSION
from .validation import (
    ANALYSIS_SCHEMA,
    SCHEMAS_DIR,
    PayloadValidationError,
    check_payload,
    load_schema,
)

FEATURE_CONTRACT_VERSION = "2026-10-v1"
SCHEMA_VERSION = "v1"

logger = logging.getLogger(__name__)

mcp = FastMCP("assignment-ai")

CLI_COMMAND_SCHEMAS: dict[str, str] = {
    "agent.capabilities": "agent.capabilities.schema.json",
    "analyze": "analyze.schema.json",
    "draft": "draft.schema.json",
    "run": "run.schema.json",
    "enhance": "enhance.schema.json",
    "instructions": "instructions.schema.json",
    "config.status": "config.status.schema.json",
    "config.set-key": "config.set-key.schema.json",
    "config.set-delay": "config.set-delay.schema.json",
}


def _error_payload(
    code: str,
    message: str,
    *,
    command: list[str] | None = None,
    exit_code: int | None = None,
    stdout: str = "",
    stderr: str = "",
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    info: dict[str, Any] = {"stdout": stdout, "stderr": stderr, **(details or {})}
    if command is not None:
        info["command"] = command
    if exit_code is not None:
        info["exit_code"] = exit_code
    return {"ok": False, "error": {"code": code, "message": message, "details": info}}


def _validate_cli_envelope(payload: dict[str, Any]) -> dict[str, Any] | None:
    command = payload.get("command")
    if not isinstance(command, str):
        # CLI error envelopes carry no command; pass them through untouched.
        if payload.get("ok") is False and isinstance(payload.get("error"), dict):
            return None
        return _error_payload(
            "SCHEMA_VALIDATION_ERROR",
            "assignment-ai envelope has no command name.",
            details={"schema_dir": str(SCHEMAS_DIR), "payload": payload},
        )

    schema_name = CLI_COMMAND_SCHEMAS.get(command)
    if not schema_name:
        return _error_payload(
            "SCHEMA_VALIDATION_ERROR",
            f"assignment-ai command {command!r} has no registered envelope schema.",
            details={"command": command, "schema_dir": str(SCHEMAS_DIR)},
        )

    schema_path = SCHEMAS_DIR / schema_name
    if not schema_path.exists():
        return _error_payload(
            "SCHEMA_VALIDATION_ERROR",
            f"Envelope schema {schema_name} is missing from {SCHEMAS_DIR}.",
            details={"command": command, "schema_file": str(schema_path)},
        )

    try:
        validate(instance=payload, schema=load_schema(schema_name))
    except ValidationError as exc:
        return _error_payload(
            "SCHEMA_VALIDATION_ERROR",
            f"assignment-ai {command} envelope does not match {schema_name}: {exc.message}",
            details={
                "command": command,
                "schema_file": str(schema_path),
                "validation_error": exc.message,
                "validator": exc.validator,
                "path": list(exc.absolute_path),
            },
        )
    return None


def _parse_envelope(stdout: str) -> dict[str, Any] | None:
    """Find the JSON envelope in CLI stdout.

    The whole output is tried first, then each line from the bottom up, so
    stray log text printed before the envelope does not hide it.
    """
    for candidate in (stdout, *reversed(stdout.splitlines())):
        candidate = candidate.strip()
        if not candidate:
            continue
        try:
            maybe = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(maybe, dict):
            return maybe
    return None


def _run_cli(args: list[str]) -> dict[str, Any]:
    cli_bin = os.getenv("ASSIGNMENT_AI_BIN", "assignment-ai")
    cmd = [cli_bin, "--json", *args]
    try:
        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return _error_payload(
            "CLI_BINARY_MISSING",
            f"Cannot start `{cli_bin}`. Install assignment-ai or set ASSIGNMENT_AI_BIN.",
            command=cmd,
        )

    stdout = (completed.stdout or "").strip()
    stderr = (completed.stderr or "").strip()
    parsed = _parse_envelope(stdout) if stdout else None

    if parsed is None:
        logger.warning("assignment-ai %s gave no envelope (exit %s)", args[:1], completed.returncode)
        message = (
            "assignment-ai printed no output."
            if not stdout
            else "assignment-ai output contained no JSON envelope."
        )
        return _error_payload(
            "INTERNAL_ERROR",
            message,
            stdout=stdout,
            stderr=stderr,
            exit_code=completed.returncode,
            command=cmd,
        )

    return _validate_cli_envelope(parsed) or parsed


def _source_args(external_file: str | None, out_dir: str | None = None) -> list[str]:
    args: list[str] = []
    if external_file:
        args.extend(["--external-file", external_file])
    if out_dir:
        args.extend(["--out", out_dir])
    return args


@mcp.tool()
def mcp_version_info() -> dict[str, Any]:
    """Return handshake metadata for CLI/MCP/schema compatibility."""
    return {
        "ok": True,
        "mcp_server": "assignment-ai",
        "cli_version": CLI_VERSION,
        "schema_version": SCHEMA_VERSION,
        "feature_contract_version": FEATURE_CONTRACT_VERSION,
    }


@mcp.tool()
def capabilities() -> dict[str, Any]:
    """Return command metadata from assignment-ai."""
    return _run_cli(["agent", "capabilities"])


@mcp.tool()
def analyze_assignment(description: str, external_file: str | None = None) -> dict[str, Any]:
    """Classify an assignment description and extract topics, requirements and links."""
    return _run_cli(["analyze", *_source_args(external_file), "--", description])


@mcp.tool()
def generate_draft(
    description: str,
    analysis: dict[str, Any],
    external_file: str | None = None,
    out_dir: str | None = None,
) -> dict[str, Any]:
    """Build a Markdown draft from a previously returned analysis object."""
    try:
        check_payload(analysis, ANALYSIS_SCHEMA)
    except PayloadValidationError as exc:
        return _error_payload(
            "VALIDATION_ERROR",
            f"analysis failed schema validation: {exc.message}",
            details={"path": exc.path},
        )

    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as handle:
        json.dump(analysis, handle)
        analysis_path = Path(handle.name)
    try:
        return _run_cli(
            [
                "draft",
                "--analysis",
                str(analysis_path),
                *_source_args(external_file, out_dir),
                "--",
                description,
            ]
        )
    finally:
        analysis_path.unlink(missing_ok=True)


@mcp.tool()
def run_pipeline(
    description: str,
    external_file: str | None = None,
    out_dir: str | None = None,
) -> dict[str, Any]:
    """Analyze and draft in one call."""
    return _run_cli(["run", *_source_args(external_file, out_dir), "--", description])


@mcp.tool()
def enhance_content(content: str, instruction: str) -> dict[str, Any]:
    """Apply a named enhancement (see list_instructions) to a block of text."""
    return _run_cli(["enhance", "--instruction", instruction, "--text", content])


@mcp.tool()
def list_instructions() -> dict[str, Any]:
    """List the enhancement instructions the CLI recognizes."""
    return _run_cli(["instructions"])


@mcp.tool()
def config_status() -> dict[str, Any]:
    """Report whether an LLM key is configured and the processing delay."""
    return _run_cli(["config", "status"])


@mcp.resource("assignment-ai://instructions", mime_type="application/json")
def resource_instructions() -> str:
    """Read-only resource: recognized enhancement instructions."""
    return json.dumps(_run_cli(["instructions"]), sort_keys=True)


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
