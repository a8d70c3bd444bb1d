"""Application layer - ingestion pipeline and use cases."""

from inboxbridge.application.use_cases.process_notification import ProcessNotificationUseCase
from inboxbridge.application.use_cases.setup_watch import SetupWatchUseCase

__all__ = [
    "ProcessNotificationUseCase",
    "SetupWatchUseCase",
]
