"""Load message records from a JSON file and print the grouped timeline, newest first."""
from __future__ import annotations

import argparse
import json
import logging
from datetime import timedelta
from pathlib import Path
from typing import Sequence

from chat_timeline.application.exceptions import FormatError
from chat_timeline.application.policies.grouping import project_all
from chat_timeline.application.ports.store import MessageStore
from chat_timeline.config import settings
from chat_timeline.domain.entities.message import Message
from chat_timeline.infrastructure.codec.mappers import message_from_record
from chat_timeline.infrastructure.memory.message_store import InMemoryMessageStore

logger = logging.getLogger(__name__)


def load_store(path: Path) -> MessageStore:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FormatError(f"{path}: invalid JSON: {exc.msg}") from exc
    if not isinstance(data, list):
        raise FormatError(f"{path}: expected a JSON array of message records")
    store = InMemoryMessageStore()
    store.insert_many(message_from_record(item) for item in data)
    logger.info("Loaded %d messages from %s", len(store.current()), path)
    return store


def render_rows(messages: Sequence[Message], threshold: timedelta) -> list[str]:
    rows: list[str] = []
    for i, (message, tag) in enumerate(zip(messages, project_all(messages, threshold=threshold))):
        author = message.author_id or "<system>"
        rows.append(
            f"{i:>4}  {message.created_at:%Y-%m-%d %H:%M:%S}  "
            f"{author:<16} {tag.position.value:<6}  {message.id}"
        )
        if tag.show_date_separator:
            rows.append(f"      ---- {message.created_at:%Y-%m-%d} ----")
    return rows


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="chat_timeline", description=__doc__)
    parser.add_argument("path", type=Path, help="JSON file holding an array of message records")
    parser.add_argument(
        "--threshold",
        type=float,
        default=settings.GROUP_THRESHOLD_SECONDS,
        help="grouping window in seconds (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        store = load_store(args.path)
    except (OSError, FormatError) as exc:
        logger.error("Cannot load %s: %s", args.path, exc)
        return 1

    try:
        for row in render_rows(store.current(), timedelta(seconds=args.threshold)):
            print(row)
    finally:
        store.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
