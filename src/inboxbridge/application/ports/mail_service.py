from __future__ import annotations
from typing import Iterable, Optional, Protocol

from inboxbridge.domain.entities.email_message import MessageContent
from inboxbridge.domain.entities.history import ChangeEvent, HistoryCursor
from inboxbridge.domain.entities.watch import WatchRegistration


class MailService(Protocol):
    def list_history(self, start: HistoryCursor) -> list[ChangeEvent]: ...
    def get_message(self, message_id: str) -> Optional[MessageContent]: ...
    def watch(self, label_ids: Iterable[str], topic_name: str) -> WatchRegistration: ...
