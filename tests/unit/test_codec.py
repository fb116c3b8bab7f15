from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timedelta, timezone

import pytest

from chat_timeline.application.exceptions import FormatError
from chat_timeline.domain.entities.message import (
    CustomMessage,
    FileMessage,
    ImageMessage,
    Message,
    SystemMessage,
    TextMessage,
)
from chat_timeline.domain.value_objects.enums import MessageStatus
from chat_timeline.infrastructure.codec.mappers import (
    deserialize_message,
    message_from_record,
    message_to_record,
    serialize_message,
)

NOW = datetime(2025, 1, 15, 12, 0, 0, 123000, tzinfo=timezone.utc)

SAMPLES: list[Message] = [
    TextMessage(
        id="t1",
        author_id="u1",
        created_at=NOW,
        text="hello",
        status=MessageStatus.SEEN,
        reply_to_id="t0",
        updated_at=NOW + timedelta(minutes=1),
        metadata={"lang": "en"},
    ),
    ImageMessage(
        id="i1",
        author_id="u2",
        created_at=NOW,
        image_url="https://example.com/a.png",
        caption="cat",
        width=640.0,
        height=480.0,
        thumb_url="https://example.com/a_thumb.png",
    ),
    FileMessage(
        id="f1",
        author_id="u1",
        created_at=NOW,
        file_url="https://example.com/report.pdf",
        file_name="report.pdf",
        file_size=2048,
        mime_type="application/pdf",
        status=MessageStatus.ERROR,
    ),
    SystemMessage(id="s1", created_at=NOW, text="u2 joined"),
    CustomMessage(id="c1", author_id="u1", created_at=NOW, metadata={"kind": "poll", "options": ["a", "b"]}),
]


def _fields(message: Message) -> dict:
    return {f.name: getattr(message, f.name) for f in dataclasses.fields(message)}


@pytest.mark.parametrize("message", SAMPLES, ids=lambda m: m.type.value)
def test_record_round_trip(message):
    decoded = message_from_record(message_to_record(message))

    assert type(decoded) is type(message)
    assert _fields(decoded) == _fields(message)


@pytest.mark.parametrize("message", SAMPLES, ids=lambda m: m.type.value)
def test_json_round_trip(message):
    decoded = deserialize_message(serialize_message(message))

    assert type(decoded) is type(message)
    assert _fields(decoded) == _fields(message)


def test_record_shape():
    record = message_to_record(SAMPLES[0])

    assert record["type"] == "text"
    assert record["authorId"] == "u1"
    assert record["replyToMessageId"] == "t0"
    assert record["status"] == "seen"
    assert datetime.fromisoformat(record["createdAt"]) == NOW


def test_absent_optionals_are_null():
    message = TextMessage(id="t", author_id="u", created_at=NOW, text="x")
    record = message_to_record(message)

    assert record["updatedAt"] is None
    assert record["replyToMessageId"] is None
    assert record["metadata"] is None
    assert json.loads(serialize_message(message))["updatedAt"] is None


def test_system_record_has_empty_author():
    assert message_to_record(SAMPLES[3])["authorId"] == ""


def test_system_record_ignores_author_on_decode():
    message = message_from_record(
        {"type": "system", "id": "s", "authorId": "someone", "createdAt": NOW.isoformat(), "text": "hi"}
    )

    assert message.author_id == ""


def test_missing_status_defaults_to_sent():
    message = message_from_record(
        {"type": "text", "id": "t", "authorId": "u", "createdAt": "2025-01-15T12:00:00Z", "text": "hi"}
    )

    assert message.status is MessageStatus.SENT


def test_unknown_type_names_the_value():
    with pytest.raises(FormatError, match="Unknown message type: sticker"):
        message_from_record({"type": "sticker", "id": "x"})


def test_missing_type_is_format_error():
    with pytest.raises(FormatError, match="Unknown message type"):
        message_from_record({"id": "x", "authorId": "u", "createdAt": NOW.isoformat(), "text": "hi"})


def test_missing_required_field_is_format_error():
    with pytest.raises(FormatError, match="Malformed text message record") as exc_info:
        message_from_record({"type": "text", "id": "x", "authorId": "u", "createdAt": NOW.isoformat()})

    assert exc_info.value.__cause__ is not None


def test_bad_timestamp_is_format_error():
    with pytest.raises(FormatError):
        message_from_record({"type": "custom", "id": "x", "authorId": "u", "createdAt": "yesterday"})


def test_invalid_json_is_format_error():
    with pytest.raises(FormatError, match="Invalid JSON"):
        deserialize_message("{not json")


def test_non_object_record_is_format_error():
    with pytest.raises(FormatError):
        deserialize_message("[1, 2]")
