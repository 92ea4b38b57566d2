from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .backend import DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_MODEL

API_KEY_ENV = "GEMINI_API_KEY"
CONFIG_ENV = "GEMINI_MCP_CONFIG"

CONFIG_PATH = Path.home() / ".config" / "gemini-mcp" / "config.yml"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(RuntimeError):
    pass


class MissingCredentialError(ConfigError):
    pass


@dataclass(frozen=True)
class ServerConfig:
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    # None means backend calls may take as long as they take.
    request_timeout: float | None = None
    log_level: str = "INFO"
    # Inline base64 images arrive on a single line.
    max_line_bytes: int = 64 * 1024 * 1024


def _validate(cfg: Mapping[str, Any]) -> dict[str, Any]:
    defaults = asdict(ServerConfig())
    merged = {**defaults, **{k: v for k, v in cfg.items() if k in defaults}}
    for key in ("model", "base_url", "api_version"):
        if not isinstance(merged[key], str) or not merged[key].strip():
            merged[key] = defaults[key]
        else:
            merged[key] = merged[key].strip()
    raw_timeout = merged["request_timeout"]
    if isinstance(raw_timeout, (int, float)) and not isinstance(raw_timeout, bool) and raw_timeout > 0:
        merged["request_timeout"] = float(raw_timeout)
    else:
        merged["request_timeout"] = None
    level = str(merged["log_level"] or "").upper()
    merged["log_level"] = level if level in _LOG_LEVELS else defaults["log_level"]
    raw_mlb = merged["max_line_bytes"]
    merged["max_line_bytes"] = (
        int(raw_mlb) if isinstance(raw_mlb, int) and not isinstance(raw_mlb, bool) and raw_mlb >= 1024
        else defaults["max_line_bytes"]
    )
    return merged


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if env.get("GEMINI_MODEL"):
        overrides["model"] = env["GEMINI_MODEL"]
    if env.get("GEMINI_BASE_URL"):
        overrides["base_url"] = env["GEMINI_BASE_URL"]
    if env.get("GEMINI_MCP_LOG_LEVEL"):
        overrides["log_level"] = env["GEMINI_MCP_LOG_LEVEL"]
    if env.get("GEMINI_MCP_TIMEOUT"):
        try:
            overrides["request_timeout"] = float(env["GEMINI_MCP_TIMEOUT"])
        except ValueError:
            logging.getLogger(__name__).warning("Ignoring non-numeric GEMINI_MCP_TIMEOUT")
    return overrides


def load_config(path: Path | None = None, env: Mapping[str, str] | None = None) -> ServerConfig:
    """Defaults, then the YAML file (if present), then environment overrides."""
    env = os.environ if env is None else env
    if path is None:
        path = Path(env[CONFIG_ENV]).expanduser() if env.get(CONFIG_ENV) else CONFIG_PATH
    raw: dict[str, Any] = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        raw = loaded if isinstance(loaded, dict) else {}
    merged = _validate({**raw, **_from_env(env)})
    return ServerConfig(**merged)


def with_overrides(config: ServerConfig, **changes: Any) -> ServerConfig:
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        return config
    return ServerConfig(**_validate({**asdict(config), **changes}))


def require_api_key(env: Mapping[str, str] | None = None) -> str:
    env = os.environ if env is None else env
    key = (env.get(API_KEY_ENV) or "").strip()
    if not key:
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable is required")
    return key
