"""JSON envelope for store operations: {"event": ..., "data": ...}."""
from __future__ import annotations

import json
from typing import Any

from chat_timeline.application.exceptions import FormatError
from chat_timeline.domain.events.operations import (
    InsertOperation,
    Operation,
    RemoveOperation,
    SetOperation,
    UpdateOperation,
)
from chat_timeline.infrastructure.codec.mappers import message_from_record, message_to_record


def serialize_event(event_type: str, payload: dict[str, Any]) -> str:
    envelope = {"event": event_type, "data": payload}
    return json.dumps(envelope)


def deserialize_event(raw: str | bytes) -> tuple[str, dict[str, Any]]:
    try:
        data = json.loads(raw)
        return data["event"], data["data"]
    except (json.JSONDecodeError, KeyError, TypeError) as exc:
        raise FormatError(f"Malformed operation envelope: {exc}") from exc


def operation_to_event(op: Operation) -> tuple[str, dict[str, Any]]:
    match op:
        case InsertOperation(message=message, index=index):
            return "insert", {"index": index, "message": message_to_record(message)}
        case RemoveOperation(message=message, index=index):
            return "remove", {"index": index, "message": message_to_record(message)}
        case UpdateOperation(old_message=old, new_message=new, index=index):
            return "update", {
                "index": index,
                "oldMessage": message_to_record(old),
                "newMessage": message_to_record(new),
            }
        case SetOperation(messages=messages):
            return "set", {"messages": [message_to_record(m) for m in messages]}
    raise TypeError(f"Unsupported operation: {type(op).__name__}")


def operation_from_event(event_type: str, data: dict[str, Any]) -> Operation:
    try:
        match event_type:
            case "insert":
                return InsertOperation(message=message_from_record(data["message"]), index=data["index"])
            case "remove":
                return RemoveOperation(message=message_from_record(data["message"]), index=data["index"])
            case "update":
                return UpdateOperation(
                    old_message=message_from_record(data["oldMessage"]),
                    new_message=message_from_record(data["newMessage"]),
                    index=data["index"],
                )
            case "set":
                return SetOperation(messages=tuple(message_from_record(m) for m in data["messages"]))
    except (KeyError, TypeError) as exc:
        raise FormatError(f"Malformed {event_type} operation: {exc}") from exc
    raise FormatError(f"Unknown operation event: {event_type}")


def serialize_operation(op: Operation) -> str:
    return serialize_event(*operation_to_event(op))


def deserialize_operation(raw: str | bytes) -> Operation:
    return operation_from_event(*deserialize_event(raw))
