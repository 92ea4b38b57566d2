from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Who produced a turn. Values are the wire names the backend expects."""

    CALLER = "user"
    GENERATOR = "model"


@dataclass(frozen=True, slots=True)
class InlineData:
    mime_type: str
    data: str  # base64

    def as_wire(self) -> dict[str, Any]:
        return {"mimeType": self.mime_type, "data": self.data}


@dataclass(frozen=True, slots=True)
class Part:
    text: str | None = None
    inline_data: InlineData | None = None

    @classmethod
    def from_text(cls, text: str) -> "Part":
        return cls(text=text)

    @classmethod
    def from_bytes(cls, data: str, mime_type: str) -> "Part":
        return cls(inline_data=InlineData(mime_type=mime_type, data=data))

    def as_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.text is not None:
            payload["text"] = self.text
        if self.inline_data is not None:
            payload["inlineData"] = self.inline_data.as_wire()
        return payload


@dataclass(frozen=True, slots=True)
class Turn:
    role: Role
    parts: tuple[Part, ...]

    @classmethod
    def caller(cls, *parts: Part) -> "Turn":
        return cls(role=Role.CALLER, parts=tuple(parts))

    @classmethod
    def generator(cls, text: str) -> "Turn":
        return cls(role=Role.GENERATOR, parts=(Part.from_text(text),))

    @property
    def text(self) -> str:
        return "".join(p.text for p in self.parts if p.text)

    def as_wire(self) -> dict[str, Any]:
        return {"role": self.role.value, "parts": [p.as_wire() for p in self.parts]}


@dataclass(frozen=True, slots=True)
class GenerationConfig:
    temperature: float | None = None
    max_output_tokens: int | None = None

    def as_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_output_tokens is not None:
            payload["maxOutputTokens"] = self.max_output_tokens
        return payload


@dataclass(slots=True)
class Session:
    key: str
    turns: list[Turn] = field(default_factory=list)

    def history(self) -> list[Turn]:
        return list(self.turns)
