"""
In-memory session backend for the middleware pipeline.

Scene tracking only reads and writes ``ctx.session.scene``; loading and saving
the session belongs to the host. This module provides a simple backend for
tests and single-process deployments. Nothing stored here survives a restart.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Type

import anyio
from pydantic import BaseModel

from .composer import NextFunction
from .models import SceneSessionData

logger = logging.getLogger(__name__)


class SessionStorage(ABC):
    """Abstract storage for dumped session data, keyed by session key."""

    @abstractmethod
    async def read(self, key: str) -> Optional[Dict[str, Any]]:
        """Return stored data for ``key``, or None if there is none."""
        pass

    @abstractmethod
    async def write(self, key: str, data: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass


class MemorySessionStorage(SessionStorage):
    """Dictionary-backed session storage."""

    def __init__(self):
        self._data: Dict[str, Dict[str, Any]] = {}

    async def read(self, key: str) -> Optional[Dict[str, Any]]:
        data = self._data.get(key)
        return dict(data) if data is not None else None

    async def write(self, key: str, data: Dict[str, Any]) -> None:
        self._data[key] = dict(data)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


def default_session_key(ctx: Any) -> Optional[str]:
    """Key sessions by the payload's ``chat_id`` (mapping key or attribute)."""
    payload = getattr(ctx, "payload", None)
    if isinstance(payload, Mapping):
        chat_id = payload.get("chat_id")
    else:
        chat_id = getattr(payload, "chat_id", None)
    return None if chat_id is None else str(chat_id)


@dataclass
class SessionConfig:
    """Configuration for :class:`SessionMiddleware`.

    Attributes:
        get_key: Maps a context to its session key. Returning None runs the
                 request without a session.
        model: Pydantic model used to load stored data. Must have a ``scene``
               field; subclass :class:`SceneSessionData` to add more.
        initial: Factory for new sessions. Defaults to ``model()``.
        storage: Where sessions live between requests.

    Examples:
        # Defaults: key by chat_id, in-memory storage
        SessionConfig()

        # Custom session model and key
        SessionConfig(
            model=ShopSession,
            get_key=lambda ctx: ctx.payload.user_id,
        )
    """

    get_key: Callable[[Any], Optional[str]] = default_session_key
    model: Type[BaseModel] = SceneSessionData
    initial: Optional[Callable[[], BaseModel]] = None
    storage: SessionStorage = field(default_factory=MemorySessionStorage)

    def create(self) -> BaseModel:
        """Create a fresh session."""
        if self.initial is not None:
            return self.initial()
        return self.model()


class SessionMiddleware:
    """Load the session before the rest of the chain and save it afterwards.

    Requests sharing a session key run one at a time, so each session sees at
    most one in-flight mutation. The session is saved even if a later stage
    raises; the error then propagates. Setting ``ctx.session`` to None deletes
    the stored session.
    """

    def __init__(self, config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()
        self._locks: Dict[str, anyio.Lock] = {}
        self._waiting: Dict[str, int] = {}

    async def __call__(self, ctx: Any, next_: NextFunction) -> None:
        key = self.config.get_key(ctx)
        if key is None:
            logger.debug("No session key for request, continuing without session")
            await next_()
            return

        lock = self._locks.setdefault(key, anyio.Lock())
        self._waiting[key] = self._waiting.get(key, 0) + 1
        try:
            async with lock:
                ctx.session = await self._load(key)
                try:
                    await next_()
                finally:
                    await self._save(key, ctx.session)
        finally:
            self._waiting[key] -= 1
            if not self._waiting[key]:
                del self._waiting[key]
                del self._locks[key]

    async def _load(self, key: str) -> BaseModel:
        data = await self.config.storage.read(key)
        if data is None:
            logger.debug(f"Creating new session {key}")
            return self.config.create()
        logger.debug(f"Loaded session {key}")
        return self.config.model.model_validate(data)

    async def _save(self, key: str, session: Optional[BaseModel]) -> None:
        if session is None:
            logger.debug(f"Deleting session {key}")
            await self.config.storage.delete(key)
            return
        logger.debug(f"Saving session {key}")
        await self.config.storage.write(key, session.model_dump())
