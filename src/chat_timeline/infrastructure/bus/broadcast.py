"""In-process operation fan-out: one broadcaster per store, one queue per subscriber."""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

from chat_timeline.application.exceptions import SubscriptionClosed
from chat_timeline.domain.events.operations import Operation

logger = logging.getLogger(__name__)

_CLOSED = object()


class OperationSubscription:
    """Consumer handle. Iterate with ``async for`` until the store is disposed."""

    def __init__(self, broadcaster: OperationBroadcaster | None, maxsize: int = 0) -> None:
        self._broadcaster = broadcaster
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._marker_queued = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Operations delivered but not yet consumed."""
        # The end-of-stream marker is not an operation.
        return self._queue.qsize() - int(self._marker_queued)

    def unsubscribe(self) -> None:
        if self._broadcaster is not None:
            self._broadcaster.detach(self)
            self._broadcaster = None
        self._close()

    async def get(self) -> Operation:
        if self._closed and self._queue.empty():
            raise SubscriptionClosed("Subscription is closed")
        item = await self._queue.get()
        if item is _CLOSED:
            self._marker_queued = False
            raise SubscriptionClosed("Subscription is closed")
        return item  # type: ignore[return-value]

    def get_nowait(self) -> Operation:
        """Raise ``asyncio.QueueEmpty`` if nothing is pending."""
        if self._closed and self._queue.empty():
            raise SubscriptionClosed("Subscription is closed")
        item = self._queue.get_nowait()
        if item is _CLOSED:
            self._marker_queued = False
            raise SubscriptionClosed("Subscription is closed")
        return item  # type: ignore[return-value]

    def __aiter__(self) -> AsyncIterator[Operation]:
        return self

    async def __anext__(self) -> Operation:
        try:
            return await self.get()
        except SubscriptionClosed:
            raise StopAsyncIteration from None

    def _offer(self, op: Operation) -> bool:
        try:
            self._queue.put_nowait(op)
        except asyncio.QueueFull:
            return False
        return True

    def _close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(_CLOSED)
            self._marker_queued = True
        except asyncio.QueueFull:
            # Consumers drain the backlog and then observe the closed flag.
            pass


class OperationBroadcaster:
    """Delivers every published operation to every attached subscription, in order."""

    def __init__(self, default_maxsize: int = 0) -> None:
        self._default_maxsize = default_maxsize
        self._subscriptions: list[OperationSubscription] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, maxsize: int | None = None) -> OperationSubscription:
        size = self._default_maxsize if maxsize is None else maxsize
        if self._closed:
            sub = OperationSubscription(None, maxsize=size)
            sub._close()
            return sub
        sub = OperationSubscription(self, maxsize=size)
        self._subscriptions.append(sub)
        logger.debug("Subscriber attached (total=%d)", len(self._subscriptions))
        return sub

    def detach(self, sub: OperationSubscription) -> None:
        try:
            self._subscriptions.remove(sub)
        except ValueError:
            return
        logger.debug("Subscriber detached (total=%d)", len(self._subscriptions))

    def publish(self, op: Operation) -> None:
        if self._closed:
            return
        overflowed: list[OperationSubscription] = []
        for sub in self._subscriptions:
            if not sub._offer(op):
                overflowed.append(sub)
        for sub in overflowed:
            logger.warning("Subscriber queue full, dropping subscriber")
            sub.unsubscribe()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        subs, self._subscriptions = self._subscriptions, []
        for sub in subs:
            sub._broadcaster = None
            sub._close()
        logger.info("Operation channel closed (%d subscribers notified)", len(subs))
