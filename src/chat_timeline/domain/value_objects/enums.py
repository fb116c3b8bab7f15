from __future__ import annotations

from enum import StrEnum


class MessageStatus(StrEnum):
    SENDING = "sending"
    SENT = "sent"
    DELIVERED = "delivered"
    SEEN = "seen"
    ERROR = "error"

    @property
    def is_delivered(self) -> bool:
        return self in (MessageStatus.DELIVERED, MessageStatus.SEEN)


class MessageType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    SYSTEM = "system"
    CUSTOM = "custom"


class GroupPosition(StrEnum):
    """Place of a message inside a run of same-author messages."""

    SINGLE = "single"
    FIRST = "first"
    MIDDLE = "middle"
    LAST = "last"

    @property
    def show_author(self) -> bool:
        return self in (GroupPosition.SINGLE, GroupPosition.FIRST)

    @property
    def show_tail(self) -> bool:
        return self in (GroupPosition.SINGLE, GroupPosition.LAST)
