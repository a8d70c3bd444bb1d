from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from googleapiclient.discovery import build
from loguru import logger

from inboxbridge.domain.errors import AuthorizationError


@dataclass(frozen=True)
class GmailCredentialsConfig:
    """
    Service-account key material plus the mailbox to impersonate.
    """
    key_file_path: str
    scopes: tuple[str, ...] = field(default=("https://www.googleapis.com/auth/gmail.readonly",))
    subject: Optional[str] = None


class GmailServiceProvider:
    """
    Owns the authenticated Gmail handle for the process.

    The authorization handshake runs exactly once, even when several
    notifications arrive before it completes. The discovery client is not
    thread-safe, so each thread gets its own service object built on the
    shared credentials.
    """

    def __init__(self, cfg: GmailCredentialsConfig) -> None:
        self.cfg = cfg
        self._lock = threading.Lock()
        self._credentials: Optional[service_account.Credentials] = None
        self._local = threading.local()

    def _authorize(self) -> service_account.Credentials:
        try:
            creds = service_account.Credentials.from_service_account_file(
                self.cfg.key_file_path,
                scopes=list(self.cfg.scopes),
                subject=self.cfg.subject,
            )
            creds.refresh(Request())
        except (GoogleAuthError, OSError, ValueError) as e:
            logger.warning("Authentication Failed")
            raise AuthorizationError(f"Gmail authorization failed: {e}") from e
        logger.info(f"Authorized Gmail access for {self.cfg.subject or 'service account'}")
        return creds

    def credentials(self) -> service_account.Credentials:
        if self._credentials is not None:
            return self._credentials
        with self._lock:
            if self._credentials is None:
                self._credentials = self._authorize()
        return self._credentials

    def service(self) -> Any:
        """Gmail v1 service for the calling thread."""
        svc = getattr(self._local, "service", None)
        if svc is None:
            svc = build("gmail", "v1", credentials=self.credentials(), cache_discovery=False)
            self._local.service = svc
        return svc


_provider: Optional[GmailServiceProvider] = None
_provider_lock = threading.Lock()


def get_gmail_provider(cfg: Optional[GmailCredentialsConfig] = None) -> GmailServiceProvider:
    """Process-wide provider; ``cfg`` is only used on first call."""
    global _provider
    if _provider is None:
        with _provider_lock:
            if _provider is None:
                if cfg is None:
                    raise ValueError("Gmail credentials config required on first use")
                _provider = GmailServiceProvider(cfg)
    return _provider
