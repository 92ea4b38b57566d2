"""In-memory chat sessions keyed by a caller-supplied session id."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import AsyncIterator

from .content import Part, Session, Turn

logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "default"
SYSTEM_ACK = "Understood. I will follow these instructions."


class SessionNotFoundError(LookupError):
    pass


class SessionStore:
    """Owns every chat session for the lifetime of the process.

    Callers that read a session, await the backend and then append must hold
    :meth:`lock` for that key for the whole sequence; concurrent tool calls
    against one key would otherwise interleave their turns. Keys never
    share a lock.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @contextlib.asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for *key*. The lock is dropped once nobody holds or awaits it."""
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if not self._holders[key]:
                del self._holders[key]
                del self._locks[key]

    def get(self, key: str) -> Session | None:
        return self._sessions.get(key)

    def get_or_create(self, key: str, system_prompt: str | None = None) -> Session:
        session = self._sessions.get(key)
        if session is not None:
            if system_prompt:
                logger.debug("Ignoring system prompt for existing session %r", key)
            return session
        session = Session(key=key)
        if system_prompt:
            session.turns.append(Turn.caller(Part.from_text(f"System: {system_prompt}")))
            session.turns.append(Turn.generator(SYSTEM_ACK))
        self._sessions[key] = session
        logger.info("Created chat session %r", key)
        return session

    def append(self, key: str, caller_turn: Turn, generator_turn: Turn) -> None:
        session = self._sessions.get(key)
        if session is None:
            raise SessionNotFoundError(f"No chat session: {key}")
        session.turns.append(caller_turn)
        session.turns.append(generator_turn)

    async def clear(self, key: str) -> bool:
        async with self.lock(key):
            removed = self._sessions.pop(key, None) is not None
        if removed:
            logger.info("Cleared chat session %r", key)
        return removed

    def __contains__(self, key: object) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
