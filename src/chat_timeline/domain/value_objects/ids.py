from __future__ import annotations

from typing import NewType

MessageId = NewType("MessageId", str)
AuthorId = NewType("AuthorId", str)

SYSTEM_AUTHOR_ID = AuthorId("")
