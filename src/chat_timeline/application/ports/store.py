from __future__ import annotations

from typing import Callable, Iterable, Protocol

from chat_timeline.application.ports.bus import OperationStream
from chat_timeline.domain.entities.message import Message

Listener = Callable[[], None]


class MessageStore(Protocol):
    """Newest-first message sequence that reports every mutation as an operation."""

    def current(self) -> tuple[Message, ...]: ...

    def insert(self, message: Message) -> None: ...

    def insert_many(self, messages: Iterable[Message]) -> None:
        """Place each message like ``insert`` and emit a single ``SetOperation``."""
        ...

    def update(self, old_message: Message, new_message: Message) -> None:
        """Replace the slot holding ``old_message.id``; no-op when absent."""
        ...

    def remove(self, message: Message) -> None: ...

    def replace_all(self, messages: Iterable[Message]) -> None:
        """Install ``messages`` verbatim, without re-sorting."""
        ...

    def subscribe(self, maxsize: int | None = None) -> OperationStream: ...

    def add_listener(self, listener: Listener) -> None: ...

    def remove_listener(self, listener: Listener) -> None: ...

    def dispose(self) -> None: ...
