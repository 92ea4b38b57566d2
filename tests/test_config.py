from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from gemini_mcp.backend import DEFAULT_MODEL
from gemini_mcp.config import (
    ConfigError,
    MissingCredentialError,
    ServerConfig,
    load_config,
    require_api_key,
    with_overrides,
)
from gemini_mcp.logging_config import MASK, SecretMaskingFilter


def test_defaults_without_file(tmp_path) -> None:
    config = load_config(tmp_path / "missing.yml", env={})
    assert config == ServerConfig()
    assert config.model == DEFAULT_MODEL
    assert config.request_timeout is None


def test_yaml_file_values(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("model: gemini-2.5-flash\nrequest_timeout: 30\nlog_level: debug\nunknown: 1\n")
    config = load_config(path, env={})
    assert config.model == "gemini-2.5-flash"
    assert config.request_timeout == 30.0
    assert config.log_level == "DEBUG"


def test_invalid_values_fall_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("model: ''\nrequest_timeout: -5\nlog_level: LOUD\nmax_line_bytes: 10\n")
    assert load_config(path, env={}) == ServerConfig()


def test_env_overrides_file(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("model: from-file\n")
    env = {"GEMINI_MODEL": "from-env", "GEMINI_MCP_TIMEOUT": "12.5", "GEMINI_MCP_LOG_LEVEL": "warning"}
    config = load_config(path, env=env)
    assert config.model == "from-env"
    assert config.request_timeout == 12.5
    assert config.log_level == "WARNING"


def test_config_path_from_env(tmp_path) -> None:
    path = tmp_path / "alt.yml"
    path.write_text("base_url: https://proxy.test\n")
    config = load_config(env={"GEMINI_MCP_CONFIG": str(path)})
    assert config.base_url == "https://proxy.test"


def test_broken_yaml_raises(tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("model: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_with_overrides_skips_none() -> None:
    base = ServerConfig()
    assert with_overrides(base, model=None, log_level=None) is base
    assert with_overrides(base, model="m2").model == "m2"


def test_require_api_key() -> None:
    assert require_api_key({"GEMINI_API_KEY": " k "}) == "k"
    with pytest.raises(MissingCredentialError):
        require_api_key({})
    with pytest.raises(MissingCredentialError):
        require_api_key({"GEMINI_API_KEY": "   "})


def test_secret_masking_filter() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "key=%s url=%s", ("abc123", "x?k=abc123"), None)
    SecretMaskingFilter(["abc123"]).filter(record)
    assert "abc123" not in record.getMessage()
    assert MASK in record.getMessage()
