from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from gemini_mcp.registry import RegisteredTool, RegistryError, ToolDescriptor, ToolRegistry
from gemini_mcp.tools.handlers import build_registry
from gemini_mcp.tools.schemas import TOOL_SCHEMAS

EXPECTED_ORDER = [
    "generate_text",
    "analyze_image",
    "extract_text_from_image",
    "compare_images",
    "generate_code",
    "explain_code",
    "refactor_code",
    "convert_code",
    "chat",
    "clear_chat_history",
    "summarize_conversation",
    "translate_text",
    "summarize_text",
    "rewrite_text",
    "generate_structured_data",
    "check_content_safety",
    "moderate_text",
]


async def _noop(arguments: dict) -> str:
    return "ok"


def _tool(name: str, description: str = "does things", schema: dict | None = None) -> RegisteredTool:
    if schema is None:
        schema = {"type": "object", "properties": {}, "required": []}
    return RegisteredTool(ToolDescriptor(name, description, schema), _noop)


def test_catalog_order_matches_declaration(handlers) -> None:
    registry = build_registry(handlers)
    assert [d.name for d in registry.list()] == EXPECTED_ORDER
    assert registry.names() == [entry["name"] for entry in TOOL_SCHEMAS]


def test_every_tool_has_description_and_required_fields(handlers) -> None:
    for descriptor in build_registry(handlers).list():
        assert descriptor.description.strip()
        schema = descriptor.input_schema
        assert "required" in schema or "oneOf" in schema


def test_resolve(handlers) -> None:
    registry = build_registry(handlers)
    assert registry.resolve("chat") is not None
    assert registry.resolve("no_such_tool") is None
    assert "chat" in registry
    assert len(registry) == len(EXPECTED_ORDER)


def test_as_dict_is_a_copy(handlers) -> None:
    registry = build_registry(handlers)
    first = registry.list()[0].as_dict()
    first["inputSchema"]["required"].append("mutated")
    assert registry.list()[0].as_dict()["inputSchema"]["required"] == ["prompt"]


def test_duplicate_names_rejected() -> None:
    with pytest.raises(RegistryError, match="Duplicate"):
        ToolRegistry([_tool("a"), _tool("a")])


def test_empty_registry_rejected() -> None:
    with pytest.raises(RegistryError):
        ToolRegistry([])


def test_blank_description_rejected() -> None:
    with pytest.raises(RegistryError):
        ToolRegistry([_tool("a", description="  ")])


def test_schema_without_required_rejected() -> None:
    with pytest.raises(RegistryError):
        ToolRegistry([_tool("a", schema={"type": "object", "properties": {}})])
