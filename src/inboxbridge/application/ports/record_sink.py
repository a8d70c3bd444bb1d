from __future__ import annotations
from typing import Protocol

from inboxbridge.domain.entities.email_message import EmailRecord


class RecordSink(Protocol):
    def append(self, record: EmailRecord) -> str: ...
