"""Store implementations."""

from inboxbridge.infrastructure.stores.firestore_cursor_store import FirestoreCursorStore
from inboxbridge.infrastructure.stores.firestore_email_sink import FirestoreEmailSink

__all__ = [
    "FirestoreCursorStore",
    "FirestoreEmailSink",
]
