from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True, eq=False)
class Author:
    id: str
    display_name: str | None = None
    avatar_url: str | None = None

    @property
    def effective_name(self) -> str:
        return self.display_name if self.display_name is not None else self.id

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "avatarUrl": self.avatar_url,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Author:
        return cls(
            id=data["id"],
            display_name=data.get("displayName"),
            avatar_url=data.get("avatarUrl"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Author):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
