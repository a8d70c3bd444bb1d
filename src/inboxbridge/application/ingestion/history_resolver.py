"""Resolve a history cursor into the change events recorded since it."""

from __future__ import annotations

from loguru import logger

from inboxbridge.application.ports.mail_service import MailService
from inboxbridge.domain.entities.history import ChangeEvent, HistoryCursor


class HistoryResolver:
    def __init__(self, mail: MailService) -> None:
        self.mail = mail

    def resolve(self, cursor: HistoryCursor) -> list[ChangeEvent]:
        """Return change events since ``cursor``; empty when there is nothing to do.

        Transport and authorization errors propagate untouched.
        """
        events = self.mail.list_history(cursor)
        if not events:
            logger.warning(f"No history since cursor {cursor}, nothing to do")
            return []

        logger.debug(f"Resolved {len(events)} change events since cursor {cursor}")
        return events
