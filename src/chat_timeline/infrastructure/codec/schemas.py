"""Record models for every message variant, keyed by the ``type`` discriminator."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from chat_timeline.domain.value_objects.enums import MessageStatus


class _RecordBase(BaseModel):
    id: str
    author_id: str
    created_at: datetime
    status: MessageStatus = MessageStatus.SENT
    reply_to_message_id: str | None = None
    updated_at: datetime | None = None
    metadata: dict[str, Any] | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class TextRecord(_RecordBase):
    type: Literal["text"] = "text"
    text: str


class ImageRecord(_RecordBase):
    type: Literal["image"] = "image"
    image_url: str
    caption: str | None = None
    width: float | None = None
    height: float | None = None
    thumb_url: str | None = None


class FileRecord(_RecordBase):
    type: Literal["file"] = "file"
    file_url: str
    file_name: str
    file_size: int | None = None
    mime_type: str | None = None


class SystemRecord(_RecordBase):
    type: Literal["system"] = "system"
    author_id: str = ""
    text: str


class CustomRecord(_RecordBase):
    type: Literal["custom"] = "custom"


MessageRecord = Annotated[
    Union[TextRecord, ImageRecord, FileRecord, SystemRecord, CustomRecord],
    Field(discriminator="type"),
]

message_record_adapter: TypeAdapter[MessageRecord] = TypeAdapter(MessageRecord)
