from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class HistoryCursor:
    # Gmail historyId; opaque, but numeric in practice
    value: str

    def precedes(self, other: HistoryCursor) -> bool:
        """True only when both cursors are numeric and this one is older.

        Non-numeric cursors cannot be ordered, so monotonic advancement is
        only enforced for numeric history ids (which Gmail always issues).
        """
        if self.value.isdigit() and other.value.isdigit():
            return int(self.value) < int(other.value)
        return False

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LabelChangeEvent:
    message_id: Optional[str]
    thread_id: Optional[str]
    label_ids: frozenset[str] = frozenset()


@dataclass(frozen=True)
class MessageAddedEvent:
    message_id: Optional[str]
    thread_id: Optional[str]


ChangeEvent = Union[LabelChangeEvent, MessageAddedEvent]


@dataclass(frozen=True)
class CandidateMessage:
    id: Optional[str]
    thread_id: Optional[str]
