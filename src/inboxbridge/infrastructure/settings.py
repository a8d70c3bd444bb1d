"""Application settings using Pydantic Settings for configuration management."""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Inbox Bridge"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Google auth (service account with domain-wide delegation)
    google_key_file_path: str = "config/service-account.json"
    google_auth_subject: str | None = None
    gmail_scopes: list[str] = Field(
        default_factory=lambda: ["https://www.googleapis.com/auth/gmail.readonly"]
    )
    gmail_user_id: str = "me"

    # Watch / Pub/Sub
    gmail_watch_label_ids: list[str] = Field(default_factory=lambda: ["INBOX", "UNREAD"])
    pubsub_topic_name: str = "projects/realtime-receiving-email/topics/receiving-emails"
    push_verification_token: SecretStr | None = None

    # Ingestion
    interesting_labels: list[str] = Field(default_factory=lambda: ["INBOX", "UNREAD"])
    dedup_by_thread: bool = True
    max_workers: int = 1

    # Firestore
    firestore_project: str | None = None
    firestore_database: str | None = None
    watches_collection: str = "emailWatches"
    emails_collection: str = "emails"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
