"""Lenient post-validation of generated structured data."""
from __future__ import annotations

import json
import logging
import tomllib
import xml.etree.ElementTree as ET
from typing import Callable

import yaml

logger = logging.getLogger(__name__)


def _check_json(text: str) -> None:
    json.loads(text)


def _check_yaml(text: str) -> None:
    # Free prose is a valid YAML scalar; only collections count as data.
    parsed = yaml.safe_load(text)
    if not isinstance(parsed, (dict, list)):
        raise ValueError("YAML document is not a mapping or sequence")


def _check_toml(text: str) -> None:
    tomllib.loads(text)


def _check_xml(text: str) -> None:
    ET.fromstring(text)


_VALIDATORS: dict[str, Callable[[str], None]] = {
    "json": _check_json,
    "yaml": _check_yaml,
    "toml": _check_toml,
    "xml": _check_xml,
}


def is_valid(text: str, fmt: str) -> bool:
    check = _VALIDATORS.get(fmt)
    if check is None:
        return True
    try:
        check(text)
    except (ValueError, yaml.YAMLError, ET.ParseError):
        return False
    return True


def fence(text: str, fmt: str) -> str:
    return f"```{fmt}\n{text}\n```"


def normalize_structured(text: str, fmt: str) -> str:
    """Return *text* unchanged when it parses as *fmt*, else fenced."""
    if is_valid(text, fmt):
        return text
    logger.info("Generated %s did not parse; returning it fenced", fmt)
    return fence(text, fmt)
