from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Sequence

from chat_timeline.domain.entities.message import Message
from chat_timeline.domain.value_objects.enums import GroupPosition

GROUP_THRESHOLD = timedelta(minutes=2)


@dataclass(frozen=True, slots=True)
class GroupingTag:
    position: GroupPosition
    show_date_separator: bool


_OUT_OF_RANGE = GroupingTag(position=GroupPosition.SINGLE, show_date_separator=False)


def _grouped(a: Message, b: Message, threshold: timedelta) -> bool:
    return a.author_id == b.author_id and abs(a.created_at - b.created_at) < threshold


def project(
    messages: Sequence[Message],
    index: int,
    *,
    threshold: timedelta = GROUP_THRESHOLD,
) -> GroupingTag:
    """Derive group position and date-separator visibility for ``messages[index]``.

    ``messages`` must be newest first: ``index - 1`` is the newer neighbour
    and ``index + 1`` the older one. A message grouped only with its older
    neighbour is FIRST; one grouped only with its newer neighbour is LAST.
    """
    if index < 0 or index >= len(messages):
        return _OUT_OF_RANGE

    message = messages[index]
    newer = messages[index - 1] if index > 0 else None
    older = messages[index + 1] if index < len(messages) - 1 else None

    with_newer = newer is not None and _grouped(message, newer, threshold)
    with_older = older is not None and _grouped(message, older, threshold)

    match (with_older, with_newer):
        case (False, False):
            position = GroupPosition.SINGLE
        case (True, False):
            position = GroupPosition.FIRST
        case (True, True):
            position = GroupPosition.MIDDLE
        case _:
            position = GroupPosition.LAST

    if older is None:
        show_date = True
    else:
        show_date = message.created_at.date() != older.created_at.date()

    return GroupingTag(position=position, show_date_separator=show_date)


def project_all(
    messages: Sequence[Message],
    *,
    threshold: timedelta = GROUP_THRESHOLD,
) -> list[GroupingTag]:
    return [project(messages, i, threshold=threshold) for i in range(len(messages))]
