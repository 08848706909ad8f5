"""In-memory stores for built documentation and paged-message sessions."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

from loguru import logger

from docbot.docs.pages import Documentation
from docbot.path import DocPath

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _LRUStore(Generic[K, V]):
    """Bounded mapping that evicts the least recently used entry."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._cache: OrderedDict[K, V] = OrderedDict()

    def get(self, key: K) -> V | None:
        value = self._cache.get(key)
        if value is not None:
            self._cache.move_to_end(key)
        return value

    def insert(self, key: K, value: V) -> None:
        self._cache[key] = value
        self._cache.move_to_end(key)
        while len(self._cache) > self.capacity:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug(f"{type(self).__name__} evicted {evicted}")

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache


class DocumentStore(_LRUStore[DocPath, Documentation]):
    """Built documentation keyed by item path."""


@dataclass
class DocSession:
    """Which page (and listing group) a sent message is showing."""

    path: DocPath
    page: int = 0
    group: int = 0


class SessionStore(_LRUStore[tuple[int, int], DocSession]):
    """Sessions keyed by ``(chat_id, message_id)`` of the bot's message."""

    def get(self, chat_id: int, message_id: int) -> DocSession | None:  # type: ignore[override]
        return super().get((chat_id, message_id))

    def insert(self, chat_id: int, message_id: int, session: DocSession) -> None:  # type: ignore[override]
        super().insert((chat_id, message_id), session)


@dataclass
class BotContext:
    """Process-wide state, created at startup and handed to the channel."""

    documents: DocumentStore
    sessions: SessionStore

    @classmethod
    def create(cls, cache_size: int = 256, session_limit: int = 4096) -> BotContext:
        return cls(documents=DocumentStore(cache_size), sessions=SessionStore(session_limit))
