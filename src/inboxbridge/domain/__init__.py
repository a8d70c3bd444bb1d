"""Domain models and entities."""

from inboxbridge.domain.entities.email_message import (
    EmailRecord,
    Header,
    MessageContent,
    MessagePart,
)
from inboxbridge.domain.entities.history import (
    CandidateMessage,
    ChangeEvent,
    HistoryCursor,
    LabelChangeEvent,
    MessageAddedEvent,
)
from inboxbridge.domain.entities.outcome import BatchResult, CandidateResult, Outcome
from inboxbridge.domain.entities.watch import (
    CursorAdvance,
    WatchRegistration,
    WatchState,
    plan_cursor_advance,
)

__all__ = [
    "EmailRecord",
    "Header",
    "MessageContent",
    "MessagePart",
    "CandidateMessage",
    "ChangeEvent",
    "HistoryCursor",
    "LabelChangeEvent",
    "MessageAddedEvent",
    "BatchResult",
    "CandidateResult",
    "Outcome",
    "CursorAdvance",
    "WatchRegistration",
    "WatchState",
    "plan_cursor_advance",
]
