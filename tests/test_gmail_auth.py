"""Tests for the process-wide Gmail credential provider."""

from __future__ import annotations

import threading
import time
from unittest.mock import MagicMock, patch

import pytest

from inboxbridge.domain.errors import AuthorizationError
from inboxbridge.infrastructure.email.providers.gmail_api.auth import (
    GmailCredentialsConfig,
    GmailServiceProvider,
)

AUTH = "inboxbridge.infrastructure.email.providers.gmail_api.auth"
CFG = GmailCredentialsConfig(key_file_path="/secrets/key.json", subject="user@example.com")


def test_handshake_runs_once_under_concurrent_first_use():
    creds = MagicMock()
    creds.refresh.side_effect = lambda _req: time.sleep(0.05)

    with patch(f"{AUTH}.service_account.Credentials.from_service_account_file", return_value=creds) as factory, \
            patch(f"{AUTH}.Request"):
        provider = GmailServiceProvider(CFG)
        seen = []
        threads = [threading.Thread(target=lambda: seen.append(provider.credentials())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    assert factory.call_count == 1
    assert creds.refresh.call_count == 1
    assert all(c is creds for c in seen)
    factory.assert_called_once_with(
        "/secrets/key.json",
        scopes=["https://www.googleapis.com/auth/gmail.readonly"],
        subject="user@example.com",
    )


def test_missing_key_file_raises_authorization_error():
    with patch(
        f"{AUTH}.service_account.Credentials.from_service_account_file",
        side_effect=FileNotFoundError("/secrets/key.json"),
    ):
        with pytest.raises(AuthorizationError):
            GmailServiceProvider(CFG).credentials()


def test_service_is_built_once_per_thread():
    creds = MagicMock()
    with patch(f"{AUTH}.service_account.Credentials.from_service_account_file", return_value=creds), \
            patch(f"{AUTH}.Request"), \
            patch(f"{AUTH}.build", side_effect=lambda *a, **k: MagicMock()) as build:
        provider = GmailServiceProvider(CFG)
        first = provider.service()
        assert provider.service() is first

        other = []
        t = threading.Thread(target=lambda: other.append(provider.service()))
        t.start()
        t.join()

    assert other[0] is not first
    assert build.call_count == 2
    build.assert_called_with("gmail", "v1", credentials=creds, cache_discovery=False)
