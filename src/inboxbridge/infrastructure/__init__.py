# src/inboxbridge/infrastructure/__init__.py
"""Infrastructure layer - Gmail API, Firestore, HTTP ingress and configuration."""

from inboxbridge.infrastructure.firestore_client import (
    FirestoreClientWrapper,
    get_firestore_client,
)
from inboxbridge.infrastructure.settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Firestore
    "FirestoreClientWrapper",
    "get_firestore_client",
]
