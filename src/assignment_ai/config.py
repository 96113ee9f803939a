from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_DIR = Path.home() / ".config" / "assignment-ai"
CONFIG_FILE = CONFIG_DIR / "config.json"

LLM_PROVIDER = "Google Gemini"
API_KEY_ENV = "GEMINI_API_KEY"
DELAY_ENV = "ASSIGNMENT_AI_DELAY_SECONDS"


@dataclass(frozen=True)
class Settings:
    llm_api_key: str | None = None
    processing_delay_seconds: float = 0.0


def load_config() -> dict:
    if not CONFIG_FILE.exists():
        return {}
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (json.JSONDecodeError, OSError):
        return {}


def save_config(config: dict) -> Path:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config, indent=2))
    return CONFIG_FILE


def _llm_section(config: dict) -> dict[str, Any]:
    return config.get("llm") if isinstance(config.get("llm"), dict) else {}


def save_llm_api_key(key: str) -> Path:
    config = load_config()
    llm = _llm_section(config)
    llm["api_key"] = key.strip()
    llm["provider"] = LLM_PROVIDER
    config["llm"] = llm
    return save_config(config)


def get_llm_api_key(config: dict | None = None) -> str | None:
    env_key = os.getenv(API_KEY_ENV)
    if env_key:
        return env_key
    data = config if config is not None else load_config()
    return _llm_section(data).get("api_key") or None


def llm_key_status(config: dict | None = None) -> dict[str, Any]:
    is_set = bool(get_llm_api_key(config))
    return {"is_set": is_set, "provider": LLM_PROVIDER if is_set else None}


def _as_delay(value: Any) -> float | None:
    try:
        delay = float(value)
    except (TypeError, ValueError):
        return None
    return delay if math.isfinite(delay) and delay >= 0 else None


def get_processing_delay(config: dict | None = None) -> float:
    env_delay = os.getenv(DELAY_ENV)
    if env_delay:
        return _as_delay(env_delay) or 0.0
    data = config if config is not None else load_config()
    return _as_delay(data.get("processing_delay_seconds", 0.0)) or 0.0


def set_processing_delay(seconds: float) -> Path:
    config = load_config()
    config["processing_delay_seconds"] = float(seconds)
    return save_config(config)


def load_settings() -> Settings:
    config = load_config()
    return Settings(
        llm_api_key=get_llm_api_key(config),
        processing_delay_seconds=get_processing_delay(config),
    )
