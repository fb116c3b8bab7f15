"""Shared test fixtures."""
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from chat_timeline.application.exceptions import SubscriptionClosed
from chat_timeline.domain.entities.message import Message, TextMessage
from chat_timeline.domain.events.operations import Operation
from chat_timeline.infrastructure.bus.broadcast import OperationSubscription
from chat_timeline.infrastructure.memory.message_store import InMemoryMessageStore

T0 = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_message(
    message_id: str,
    *,
    created_at: datetime | None = None,
    minutes: float | None = None,
    author_id: str = "user-1",
    text: str | None = None,
) -> TextMessage:
    """Text message at ``created_at``, or ``minutes`` after T0."""
    if created_at is None:
        created_at = T0 + timedelta(minutes=minutes or 0)
    return TextMessage(
        id=message_id,
        author_id=author_id,
        created_at=created_at,
        text=text if text is not None else f"Message {message_id}",
    )


def ids(messages: tuple[Message, ...] | list[Message]) -> list[str]:
    return [m.id for m in messages]


def drain(sub: OperationSubscription) -> list[Operation]:
    ops: list[Operation] = []
    while True:
        try:
            ops.append(sub.get_nowait())
        except (asyncio.QueueEmpty, SubscriptionClosed):
            return ops


@pytest.fixture
def store():
    s = InMemoryMessageStore()
    yield s
    s.dispose()
