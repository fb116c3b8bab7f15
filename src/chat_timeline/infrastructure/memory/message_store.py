"""Default in-memory MessageStore."""
from __future__ import annotations

import logging
from typing import Iterable

from chat_timeline.application.ports.store import Listener
from chat_timeline.config import settings
from chat_timeline.domain.entities.message import Message
from chat_timeline.domain.events.operations import (
    InsertOperation,
    Operation,
    RemoveOperation,
    SetOperation,
    UpdateOperation,
)
from chat_timeline.domain.value_objects.ids import MessageId
from chat_timeline.infrastructure.bus.broadcast import (
    OperationBroadcaster,
    OperationSubscription,
)

logger = logging.getLogger(__name__)


class InMemoryMessageStore:
    """Keeps messages newest first and broadcasts one operation per mutation.

    Not thread-safe: every mutating call is expected to come from the
    owning task. ``current()`` returns an immutable tuple that is rebuilt
    lazily after each mutation.
    """

    def __init__(
        self,
        initial_messages: Iterable[Message] | None = None,
        *,
        subscriber_maxsize: int | None = None,
    ) -> None:
        self._messages: list[Message] = []
        for message in initial_messages or ():
            self._place(message)
        if subscriber_maxsize is None:
            subscriber_maxsize = settings.SUBSCRIBER_QUEUE_MAXSIZE
        self._broadcaster = OperationBroadcaster(default_maxsize=subscriber_maxsize)
        self._listeners: list[Listener] = []
        self._view: tuple[Message, ...] | None = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __len__(self) -> int:
        return len(self._messages)

    def current(self) -> tuple[Message, ...]:
        if self._view is None:
            self._view = tuple(self._messages)
        return self._view

    def insert(self, message: Message) -> None:
        index = self._place(message)
        self._view = None
        self._emit(InsertOperation(message=message, index=index))

    def insert_many(self, messages: Iterable[Message]) -> None:
        batch = list(messages)
        if not batch:
            return
        for message in batch:
            self._place(message)
        self._view = None
        self._emit(SetOperation(messages=self.current()))

    def update(self, old_message: Message, new_message: Message) -> None:
        index = self._index_of(MessageId(old_message.id))
        if index is None:
            logger.debug("Update skipped, message %s not in store", old_message.id)
            return
        self._messages[index] = new_message
        self._view = None
        self._emit(UpdateOperation(old_message=old_message, new_message=new_message, index=index))

    def remove(self, message: Message) -> None:
        index = self._index_of(MessageId(message.id))
        if index is None:
            logger.debug("Remove skipped, message %s not in store", message.id)
            return
        del self._messages[index]
        self._view = None
        self._emit(RemoveOperation(message=message, index=index))

    def replace_all(self, messages: Iterable[Message]) -> None:
        self._messages = list(messages)
        self._view = None
        self._emit(SetOperation(messages=self.current()))

    def subscribe(self, maxsize: int | None = None) -> OperationSubscription:
        return self._broadcaster.subscribe(maxsize)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._listeners.clear()
        self._broadcaster.close()
        logger.info("Message store disposed with %d messages", len(self._messages))

    def _place(self, message: Message) -> int:
        # First slot whose message is strictly older; equal timestamps keep the
        # newcomer behind the messages already there.
        index = 0
        for existing in self._messages:
            if message.created_at > existing.created_at:
                break
            index += 1
        self._messages.insert(index, message)
        return index

    def _index_of(self, message_id: MessageId) -> int | None:
        for i, existing in enumerate(self._messages):
            if existing.id == message_id:
                return i
        return None

    def _emit(self, op: Operation) -> None:
        if self._disposed:
            logger.warning("%s on disposed store was not broadcast", type(op).__name__)
            return
        self._broadcaster.publish(op)
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Store listener failed")
