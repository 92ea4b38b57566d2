from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from gemini_mcp.content import GenerationConfig, Turn
from gemini_mcp.dispatcher import Dispatcher
from gemini_mcp.sessions import SessionStore
from gemini_mcp.tools.handlers import ToolHandlers, build_registry


class FakeBackend:
    """Records every prompt and answers from a queue (or a counter)."""

    def __init__(self) -> None:
        self.calls: list[tuple[list[Turn], GenerationConfig | None]] = []
        self.replies: list[str] = []
        self.error: Exception | None = None

    async def generate(self, contents: Sequence[Turn], config: GenerationConfig | None = None) -> str:
        self.calls.append((list(contents), config))
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return f"reply {len(self.calls)}"

    @property
    def last_contents(self) -> list[Turn]:
        return self.calls[-1][0]

    @property
    def last_text(self) -> str:
        return "".join(turn.text for turn in self.last_contents)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore()


@pytest.fixture
def handlers(backend: FakeBackend, sessions: SessionStore) -> ToolHandlers:
    return ToolHandlers(backend, sessions)


@pytest.fixture
def dispatcher(handlers: ToolHandlers) -> Dispatcher:
    return Dispatcher(build_registry(handlers))
