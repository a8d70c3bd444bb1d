"""Assemble use cases from settings (shared by the CLI and the HTTP app)."""

from __future__ import annotations

from inboxbridge.application.use_cases.process_notification import ProcessNotificationUseCase
from inboxbridge.application.use_cases.setup_watch import SetupWatchUseCase
from inboxbridge.infrastructure.email.providers.gmail_api.auth import (
    GmailCredentialsConfig,
    get_gmail_provider,
)
from inboxbridge.infrastructure.email.providers.gmail_api.client import GmailApiMailService
from inboxbridge.infrastructure.firestore_client import get_firestore_client
from inboxbridge.infrastructure.settings import Settings, get_settings
from inboxbridge.infrastructure.stores import FirestoreCursorStore, FirestoreEmailSink


def build_mail_service(settings: Settings) -> GmailApiMailService:
    provider = get_gmail_provider(
        GmailCredentialsConfig(
            key_file_path=settings.google_key_file_path,
            scopes=tuple(settings.gmail_scopes),
            subject=settings.google_auth_subject,
        )
    )
    return GmailApiMailService(provider, user_id=settings.gmail_user_id)


def build_cursor_store(settings: Settings) -> FirestoreCursorStore:
    return FirestoreCursorStore(get_firestore_client(), collection=settings.watches_collection)


def build_process_notification(settings: Settings | None = None) -> ProcessNotificationUseCase:
    settings = settings or get_settings()
    return ProcessNotificationUseCase(
        mail=build_mail_service(settings),
        cursors=build_cursor_store(settings),
        sink=FirestoreEmailSink(get_firestore_client(), collection=settings.emails_collection),
        interesting_labels=settings.interesting_labels,
        dedup_by_thread=settings.dedup_by_thread,
        max_workers=settings.max_workers,
    )


def build_setup_watch(settings: Settings | None = None) -> SetupWatchUseCase:
    settings = settings or get_settings()
    return SetupWatchUseCase(
        mail=build_mail_service(settings),
        cursors=build_cursor_store(settings),
        label_ids=settings.gmail_watch_label_ids,
        topic_name=settings.pubsub_topic_name,
    )
