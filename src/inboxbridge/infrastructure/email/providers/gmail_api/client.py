from __future__ import annotations
from typing import Any, Callable, Iterable, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError
from loguru import logger

from inboxbridge.domain.entities.email_message import MessageContent
from inboxbridge.domain.entities.history import ChangeEvent, HistoryCursor
from inboxbridge.domain.entities.watch import WatchRegistration
from inboxbridge.domain.errors import AuthorizationError, TransportError
from inboxbridge.infrastructure.email.providers.gmail_api.auth import GmailServiceProvider
from inboxbridge.infrastructure.email.providers.gmail_api.mapper import (
    history_to_events,
    message_to_content,
)


class GmailApiMailService:
    """Gmail REST API adapter for the MailService port."""

    def __init__(self, provider: GmailServiceProvider, user_id: str = "me") -> None:
        self.provider = provider
        self.user_id = user_id

    def _execute(self, what: str, call: Callable[[Any], Any]) -> Any:
        try:
            return call(self.provider.service().users()).execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            logger.warning(f"{what} failed: {status} {e}")
            raise TransportError(f"{what} failed: {e}", status=status) from e
        except GoogleAuthError as e:
            logger.warning(f"{what} failed: {e}")
            raise AuthorizationError(f"{what} failed: {e}") from e
        except (OSError, httplib2.HttpLib2Error) as e:
            # timeouts, connection resets, TLS failures
            logger.warning(f"{what} failed: {type(e).__name__}: {e}")
            raise TransportError(f"{what} failed: {type(e).__name__}: {e}") from e

    def list_history(self, start: HistoryCursor) -> list[ChangeEvent]:
        """All history since ``start``, following pagination."""
        history: list[dict[str, Any]] = []
        page_token: Optional[str] = None
        while True:
            params: dict[str, Any] = {"userId": self.user_id, "startHistoryId": start.value}
            if page_token:
                params["pageToken"] = page_token
            resp = self._execute("Get history list", lambda users: users.history().list(**params)) or {}
            history.extend(resp.get("history") or [])
            page_token = resp.get("nextPageToken")
            if not page_token:
                break
        return history_to_events(history)

    def get_message(self, message_id: str) -> Optional[MessageContent]:
        resp = self._execute(
            "Get message detail",
            lambda users: users.messages().get(userId=self.user_id, id=message_id),
        )
        if not resp:
            return None
        return message_to_content(resp)

    def watch(self, label_ids: Iterable[str], topic_name: str) -> WatchRegistration:
        body = {"labelIds": list(label_ids), "topicName": topic_name}
        resp = self._execute(
            "Start watch",
            lambda users: users.watch(userId=self.user_id, body=body),
        )
        expiration = resp.get("expiration")
        return WatchRegistration(
            cursor=HistoryCursor(str(resp["historyId"])),
            expiration=int(expiration) if expiration is not None else None,
        )
