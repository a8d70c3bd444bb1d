"""Fetch full message content, isolating per-message transport failures."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from inboxbridge.application.ports.mail_service import MailService
from inboxbridge.domain.entities.email_message import MessageContent
from inboxbridge.domain.errors import MessageFetchError, TransportError


class MessageFetcher:
    def __init__(self, mail: MailService) -> None:
        self.mail = mail

    def fetch(self, message_id: Optional[str]) -> Optional[MessageContent]:
        """Return the message, or None when there is nothing to decode.

        Raises MessageFetchError for transport failures. Authorization errors
        are not caught here and fail the batch.
        """
        if not message_id:
            logger.warning("Candidate has no message id, skipping")
            return None

        try:
            content = self.mail.get_message(message_id)
        except TransportError as e:
            raise MessageFetchError(message_id, f"Get message failed: {e}") from e

        if content is None:
            logger.warning(f"Message object is null - id: {message_id}")
            return None
        return content
