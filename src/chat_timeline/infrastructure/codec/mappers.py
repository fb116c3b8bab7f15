from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, assert_never

from pydantic import ValidationError

from chat_timeline.application.exceptions import FormatError
from chat_timeline.domain.entities.message import (
    CustomMessage,
    FileMessage,
    ImageMessage,
    Message,
    SystemMessage,
    TextMessage,
)
from chat_timeline.domain.value_objects.enums import MessageType
from chat_timeline.infrastructure.codec.schemas import (
    CustomRecord,
    FileRecord,
    ImageRecord,
    MessageRecord,
    SystemRecord,
    TextRecord,
    message_record_adapter,
)

_KNOWN_TYPES = frozenset(t.value for t in MessageType)


def _common(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "author_id": message.author_id,
        "created_at": message.created_at,
        "status": message.status,
        "reply_to_message_id": message.reply_to_id,
        "updated_at": message.updated_at,
        "metadata": dict(message.metadata) if message.metadata is not None else None,
    }


def entity_to_record(message: Message) -> MessageRecord:
    match message:
        case TextMessage():
            return TextRecord(**_common(message), text=message.text)
        case ImageMessage():
            return ImageRecord(
                **_common(message),
                image_url=message.image_url,
                caption=message.caption,
                width=message.width,
                height=message.height,
                thumb_url=message.thumb_url,
            )
        case FileMessage():
            return FileRecord(
                **_common(message),
                file_url=message.file_url,
                file_name=message.file_name,
                file_size=message.file_size,
                mime_type=message.mime_type,
            )
        case SystemMessage():
            return SystemRecord(**_common(message), text=message.text)
        case CustomMessage():
            return CustomRecord(**_common(message))
        case _:
            raise TypeError(f"Unsupported message class: {type(message).__name__}")


def record_to_entity(record: MessageRecord) -> Message:
    common = {
        "id": record.id,
        "created_at": record.created_at,
        "status": record.status,
        "reply_to_id": record.reply_to_message_id,
        "updated_at": record.updated_at,
        "metadata": record.metadata,
    }
    match record:
        case TextRecord():
            return TextMessage(**common, author_id=record.author_id, text=record.text)
        case ImageRecord():
            return ImageMessage(
                **common,
                author_id=record.author_id,
                image_url=record.image_url,
                caption=record.caption,
                width=record.width,
                height=record.height,
                thumb_url=record.thumb_url,
            )
        case FileRecord():
            return FileMessage(
                **common,
                author_id=record.author_id,
                file_url=record.file_url,
                file_name=record.file_name,
                file_size=record.file_size,
                mime_type=record.mime_type,
            )
        case SystemRecord():
            return SystemMessage(**common, text=record.text)
        case CustomRecord():
            return CustomMessage(**common, author_id=record.author_id)
        case _:
            assert_never(record)


def message_to_record(message: Message) -> dict[str, Any]:
    """Encode as a plain dict: camelCase keys, ISO-8601 timestamps, ``None`` for absent fields."""
    return entity_to_record(message).model_dump(mode="json", by_alias=True)


def message_from_record(data: Mapping[str, Any]) -> Message:
    if not isinstance(data, Mapping):
        raise FormatError(f"Message record must be an object, got {type(data).__name__}")
    msg_type = data.get("type")
    if not isinstance(msg_type, str) or msg_type not in _KNOWN_TYPES:
        raise FormatError(f"Unknown message type: {msg_type}")
    try:
        record = message_record_adapter.validate_python(dict(data))
    except ValidationError as exc:
        raise FormatError(f"Malformed {msg_type} message record: {exc}") from exc
    return record_to_entity(record)


def serialize_message(message: Message) -> str:
    return entity_to_record(message).model_dump_json(by_alias=True)


def deserialize_message(raw: str | bytes) -> Message:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Invalid JSON: {exc.msg}") from exc
    return message_from_record(data)
