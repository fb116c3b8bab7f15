from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Self

from chat_timeline.domain.value_objects.enums import MessageStatus, MessageType
from chat_timeline.domain.value_objects.ids import SYSTEM_AUTHOR_ID


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class Message:
    """Base chat entry. Identity is the ``id``; other fields may change between versions."""

    type: ClassVar[MessageType]

    id: str
    author_id: str
    created_at: datetime
    status: MessageStatus = MessageStatus.SENT
    reply_to_id: str | None = None
    updated_at: datetime | None = None
    metadata: Mapping[str, Any] | None = None

    @property
    def is_text(self) -> bool:
        return isinstance(self, TextMessage)

    @property
    def is_system(self) -> bool:
        return isinstance(self, SystemMessage)

    @property
    def is_edited(self) -> bool:
        return self.updated_at is not None

    def with_changes(self, **changes: Any) -> Self:
        """Return a copy with ``changes`` applied and the same identity."""
        if "id" in changes and changes["id"] != self.id:
            raise ValueError("Message id cannot be changed")
        return dataclasses.replace(self, **changes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class TextMessage(Message):
    type: ClassVar[MessageType] = MessageType.TEXT

    text: str


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class ImageMessage(Message):
    type: ClassVar[MessageType] = MessageType.IMAGE

    image_url: str
    caption: str | None = None
    width: float | None = None
    height: float | None = None
    thumb_url: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class FileMessage(Message):
    type: ClassVar[MessageType] = MessageType.FILE

    file_url: str
    file_name: str
    file_size: int | None = None
    mime_type: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class SystemMessage(Message):
    """Service notice such as "user joined"; never attributed to a participant."""

    type: ClassVar[MessageType] = MessageType.SYSTEM

    author_id: str = field(default=SYSTEM_AUTHOR_ID, init=False)
    text: str


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class CustomMessage(Message):
    # Payload is carried in ``metadata``.
    type: ClassVar[MessageType] = MessageType.CUSTOM


AnyMessage = TextMessage | ImageMessage | FileMessage | SystemMessage | CustomMessage
