"""Error taxonomy for notification processing.

Two branches matter to the batch driver:

- ``BatchFatalError``: the notification as a whole failed and should be
  redelivered by the push channel.
- ``PerMessageError``: one candidate failed; the batch carries on.
"""

from __future__ import annotations

from typing import Optional


class BridgeError(Exception):
    """Base class for inboxbridge errors."""


class BatchFatalError(BridgeError):
    """Failure that aborts the whole notification."""


class AuthorizationError(BatchFatalError):
    """Credential acquisition or authorization failed."""


class TransportError(BatchFatalError):
    """A call to the mail service or the cursor store failed."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class PerMessageError(BridgeError):
    """Failure scoped to a single message."""

    def __init__(self, message_id: Optional[str], message: str) -> None:
        super().__init__(f"{message} (message id: {message_id})")
        self.message_id = message_id


class MessageFetchError(PerMessageError):
    """Fetching one message failed at the transport level."""


class DecodeError(PerMessageError):
    """Extracting headers or bodies from one message failed."""


class PersistError(PerMessageError):
    """Writing one record to the sink failed."""


class InvalidNotificationError(BridgeError):
    """Push payload could not be decoded into a mailbox notification."""
