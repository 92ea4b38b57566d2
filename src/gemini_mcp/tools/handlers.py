from __future__ import annotations

import functools
import logging
from typing import Any

from ..backend import GenerationBackend
from ..content import Part, Turn
from ..errors import InvalidParamsError
from ..registry import RegisteredTool, ToolDescriptor, ToolRegistry
from ..sessions import SessionStore
from .arguments import ChatArgs, SessionArgs, decode_arguments
from .recipes import RECIPES, PromptRecipe
from .schemas import TOOL_SCHEMAS

logger = logging.getLogger(__name__)

SUMMARY_REQUEST = "Please provide a concise summary of our conversation so far."


class ToolHandlers:
    """Tool implementations over one backend and one session store."""

    def __init__(self, backend: GenerationBackend, sessions: SessionStore) -> None:
        self.backend = backend
        self.sessions = sessions

    async def run_recipe(self, name: str, recipe: PromptRecipe, arguments: dict[str, Any]) -> str:
        args = decode_arguments(recipe.arguments, name, arguments)
        parts = await recipe.render(args)
        text = await self.backend.generate([Turn.caller(*parts)], recipe.generation(args))
        if recipe.finish is not None:
            text = recipe.finish(args, text)
        return text

    async def chat(self, arguments: dict[str, Any]) -> str:
        args = decode_arguments(ChatArgs, "chat", arguments)
        async with self.sessions.lock(args.session_id):
            session = self.sessions.get_or_create(args.session_id, args.system_prompt)
            caller = Turn.caller(Part.from_text(args.message))
            reply = await self.backend.generate([*session.history(), caller])
            self.sessions.append(args.session_id, caller, Turn.generator(reply))
        return reply

    async def clear_chat_history(self, arguments: dict[str, Any]) -> str:
        args = decode_arguments(SessionArgs, "clear_chat_history", arguments)
        await self.sessions.clear(args.session_id)
        return f"Chat history cleared for session: {args.session_id}"

    async def summarize_conversation(self, arguments: dict[str, Any]) -> str:
        args = decode_arguments(SessionArgs, "summarize_conversation", arguments)
        if args.session_id not in self.sessions:
            raise InvalidParamsError("No chat history found for this session")
        async with self.sessions.lock(args.session_id):
            session = self.sessions.get(args.session_id)
            if session is None or not session.turns:
                raise InvalidParamsError("No chat history found for this session")
            caller = Turn.caller(Part.from_text(SUMMARY_REQUEST))
            summary = await self.backend.generate([*session.history(), caller])
            self.sessions.append(args.session_id, caller, Turn.generator(summary))
        return summary

    def handler_for(self, name: str):
        if name in RECIPES:
            return functools.partial(self.run_recipe, name, RECIPES[name])
        session_tools = {
            "chat": self.chat,
            "clear_chat_history": self.clear_chat_history,
            "summarize_conversation": self.summarize_conversation,
        }
        try:
            return session_tools[name]
        except KeyError:
            raise LookupError(f"No handler implemented for tool {name}") from None


def build_registry(handlers: ToolHandlers) -> ToolRegistry:
    """Pair every catalog entry with its handler, keeping catalog order."""
    return ToolRegistry(
        RegisteredTool(
            descriptor=ToolDescriptor.from_schema(entry),
            handler=handlers.handler_for(entry["name"]),
        )
        for entry in TOOL_SCHEMAS
    )
