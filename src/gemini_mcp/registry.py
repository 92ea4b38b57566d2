from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[str]]


class RegistryError(ValueError):
    pass


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: dict[str, Any]

    @classmethod
    def from_schema(cls, entry: dict[str, Any]) -> "ToolDescriptor":
        return cls(
            name=entry["name"],
            description=entry["description"],
            input_schema=entry["inputSchema"],
        )

    def as_dict(self) -> dict[str, Any]:
        # Deep copy so a client-facing payload can never mutate the catalog.
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Fixed, ordered table of tool name -> descriptor and handler."""

    def __init__(self, tools: Iterable[RegisteredTool]) -> None:
        self._tools: dict[str, RegisteredTool] = {}
        for tool in tools:
            _check_descriptor(tool.descriptor)
            if tool.name in self._tools:
                raise RegistryError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool
        if not self._tools:
            raise RegistryError("Tool registry cannot be empty")
        logger.debug("Registered %d tools", len(self._tools))

    def list(self) -> tuple[ToolDescriptor, ...]:
        return tuple(tool.descriptor for tool in self._tools.values())

    def resolve(self, name: str) -> RegisteredTool | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools


def _check_descriptor(descriptor: ToolDescriptor) -> None:
    if not descriptor.name:
        raise RegistryError("Tool name must not be empty")
    if not descriptor.description.strip():
        raise RegistryError(f"Tool {descriptor.name} has no description")
    schema = descriptor.input_schema
    if schema.get("type") != "object":
        raise RegistryError(f"Tool {descriptor.name} schema must be an object schema")
    if "required" not in schema and "oneOf" not in schema:
        raise RegistryError(f"Tool {descriptor.name} schema does not declare its required fields")
