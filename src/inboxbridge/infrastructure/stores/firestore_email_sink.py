"""Firestore implementation of RecordSink for ingested emails."""

from __future__ import annotations

from google.api_core.exceptions import GoogleAPIError
from loguru import logger

from inboxbridge.application.ports.record_sink import RecordSink
from inboxbridge.domain.entities.email_message import EmailRecord
from inboxbridge.domain.errors import PersistError
from inboxbridge.infrastructure.firestore_client import FirestoreClientWrapper


COLLECTION_NAME = "emails"


class FirestoreEmailSink(RecordSink):
    """Append-only writes into the emails collection (auto-generated ids)."""

    def __init__(self, client: FirestoreClientWrapper, collection: str = COLLECTION_NAME):
        self.client = client
        self.collection = collection

    def append(self, record: EmailRecord) -> str:
        try:
            _, ref = self.client.client.collection(self.collection).add(record.to_document())
        except (GoogleAPIError, ValueError) as e:
            raise PersistError(record.id, f"Store email failed: {e}") from e

        logger.info(f"Stored email {record.id}: {(record.subject or '')[:50]}")
        return ref.id
