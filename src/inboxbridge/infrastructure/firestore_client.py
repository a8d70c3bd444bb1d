"""Firestore client wrapper for watch state and ingested email records."""

from google.cloud import firestore
from loguru import logger

from inboxbridge.infrastructure.settings import Settings, get_settings


class FirestoreClientWrapper:
    """Lazily connected Firestore client."""

    def __init__(self, settings: Settings | None = None):
        """Initialize Firestore client wrapper."""
        self.settings = settings or get_settings()
        self._client: firestore.Client | None = None

    def connect(self) -> firestore.Client:
        """Create the Firestore client."""
        if self._client is None:
            project = self.settings.firestore_project or "(default project)"
            logger.info(f"Connecting to Firestore project {project}")
            self._client = firestore.Client(
                project=self.settings.firestore_project,
                database=self.settings.firestore_database,
            )
        return self._client

    def disconnect(self) -> None:
        """Close the Firestore client."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("Firestore connection closed")

    @property
    def client(self) -> firestore.Client:
        """Get or create Firestore client."""
        if self._client is None:
            return self.connect()
        return self._client


# Singleton instance
_firestore_client: FirestoreClientWrapper | None = None


def get_firestore_client() -> FirestoreClientWrapper:
    """Get singleton Firestore client instance."""
    global _firestore_client
    if _firestore_client is None:
        _firestore_client = FirestoreClientWrapper()
    return _firestore_client
