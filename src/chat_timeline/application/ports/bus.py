from __future__ import annotations

from typing import AsyncIterator, Protocol

from chat_timeline.domain.events.operations import Operation


class OperationStream(Protocol):
    @property
    def closed(self) -> bool: ...

    async def get(self) -> Operation: ...

    def get_nowait(self) -> Operation: ...

    def unsubscribe(self) -> None: ...

    def __aiter__(self) -> AsyncIterator[Operation]: ...

    async def __anext__(self) -> Operation: ...
