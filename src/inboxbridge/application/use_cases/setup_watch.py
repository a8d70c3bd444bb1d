"""Register (or renew) the mailbox watch and store its initial cursor."""

from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger

from inboxbridge.application.ports.cursor_store import CursorStore
from inboxbridge.application.ports.mail_service import MailService
from inboxbridge.domain.entities.watch import WatchState


class SetupWatchUseCase:
    def __init__(
        self,
        mail: MailService,
        cursors: CursorStore,
        label_ids: Iterable[str],
        topic_name: str,
    ) -> None:
        self.mail = mail
        self.cursors = cursors
        self.label_ids = list(label_ids)
        self.topic_name = topic_name

    def run(self, email_address: str, account_id: Optional[str] = None) -> WatchState:
        """Start watching the mailbox and persist ``{emailAddress, historyId}``."""
        registration = self.mail.watch(self.label_ids, self.topic_name)
        state = WatchState(
            email_address=email_address,
            cursor=registration.cursor,
            account_id=account_id,
            expiration=registration.expiration,
        )
        self.cursors.save_watch(state)
        logger.info(
            f"Watch started for {email_address}: historyId={registration.cursor}, "
            f"expiration={registration.expiration}"
        )
        return state

    def renew(self, email_address: str) -> WatchState:
        """Re-issue the watch for a registered mailbox.

        Watches expire after seven days. Only the expiration is refreshed; the
        stored cursor stays put so the next notification still resolves history
        from where the last one stopped.
        """
        stored = self.cursors.load(email_address)
        if stored is None:
            logger.warning(f"No watch state for {email_address}, registering from scratch")
            return self.run(email_address)

        registration = self.mail.watch(self.label_ids, self.topic_name)
        state = WatchState(
            email_address=email_address,
            cursor=stored.cursor,
            previous_cursor=stored.previous_cursor,
            account_id=stored.account_id,
            expiration=registration.expiration,
        )
        self.cursors.save_watch(state)
        logger.info(f"Watch renewed for {email_address}: expiration={registration.expiration}")
        return state
