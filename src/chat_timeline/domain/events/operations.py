from __future__ import annotations

from dataclasses import dataclass

from chat_timeline.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class InsertOperation:
    message: Message
    index: int


@dataclass(frozen=True, slots=True)
class RemoveOperation:
    message: Message
    # Position the message held before it was removed.
    index: int


@dataclass(frozen=True, slots=True)
class UpdateOperation:
    old_message: Message
    new_message: Message
    index: int


@dataclass(frozen=True, slots=True)
class SetOperation:
    messages: tuple[Message, ...]


Operation = InsertOperation | RemoveOperation | UpdateOperation | SetOperation
