"""Firestore-backed per-mailbox watch state (history cursors)."""

from __future__ import annotations

from typing import Any, Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from loguru import logger

from inboxbridge.application.ports.cursor_store import CursorStore
from inboxbridge.domain.entities.history import HistoryCursor
from inboxbridge.domain.entities.watch import CursorAdvance, WatchState, plan_cursor_advance
from inboxbridge.domain.errors import TransportError
from inboxbridge.infrastructure.firestore_client import FirestoreClientWrapper


COLLECTION_NAME = "emailWatches"


def state_from_document(email_address: str, data: dict[str, Any]) -> Optional[WatchState]:
    history_id = data.get("historyId")
    if history_id is None:
        return None
    previous = data.get("previousHistoryId")
    return WatchState(
        email_address=data.get("emailAddress") or email_address,
        cursor=HistoryCursor(str(history_id)),
        previous_cursor=HistoryCursor(str(previous)) if previous is not None else None,
        account_id=data.get("accountId"),
        expiration=data.get("expiration"),
    )


def state_to_document(state: WatchState) -> dict[str, Any]:
    data: dict[str, Any] = {
        "emailAddress": state.email_address,
        "historyId": state.cursor.value,
    }
    if state.previous_cursor is not None:
        data["previousHistoryId"] = state.previous_cursor.value
    if state.account_id is not None:
        data["accountId"] = state.account_id
    if state.expiration is not None:
        data["expiration"] = state.expiration
    return data


class FirestoreCursorStore(CursorStore):
    """Watch documents keyed by mailbox email address."""

    def __init__(self, client: FirestoreClientWrapper, collection: str = COLLECTION_NAME):
        self.client = client
        self.collection = collection

    def _doc(self, email_address: str):
        return self.client.client.collection(self.collection).document(email_address)

    def load(self, email_address: str) -> Optional[WatchState]:
        try:
            snapshot = self._doc(email_address).get()
        except GoogleAPIError as e:
            raise TransportError(f"Load watch state failed for {email_address}: {e}") from e

        if not snapshot.exists:
            logger.debug(f"No watch state found for {email_address}")
            return None
        return state_from_document(email_address, snapshot.to_dict() or {})

    def advance(self, email_address: str, cursor: HistoryCursor) -> CursorAdvance:
        """Apply the notification cursor inside a transaction."""
        ref = self._doc(email_address)

        @firestore.transactional
        def _advance(transaction) -> CursorAdvance:
            snapshot = ref.get(transaction=transaction)
            stored = state_from_document(email_address, snapshot.to_dict() or {}) if snapshot.exists else None
            plan = plan_cursor_advance(email_address, stored, cursor)
            if plan.write is not None:
                transaction.set(ref, state_to_document(plan.write), merge=True)
            return plan

        try:
            plan = _advance(self.client.client.transaction())
        except GoogleAPIError as e:
            raise TransportError(f"Advance cursor failed for {email_address}: {e}") from e

        if plan.write is not None:
            logger.info(f"Saved cursor for {email_address}: historyId {cursor}")
        return plan

    def save_watch(self, state: WatchState) -> None:
        try:
            self._doc(state.email_address).set(state_to_document(state), merge=True)
        except GoogleAPIError as e:
            raise TransportError(f"Save watch state failed for {state.email_address}: {e}") from e
        logger.info(f"Saved watch state for {state.email_address}: historyId {state.cursor}")
