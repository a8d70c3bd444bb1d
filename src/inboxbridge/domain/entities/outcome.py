from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from inboxbridge.domain.entities.history import CandidateMessage, HistoryCursor


class Outcome(str, Enum):
    PERSISTED = "persisted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class CandidateResult:
    candidate: CandidateMessage
    outcome: Outcome
    reason: Optional[str] = None
    record_id: Optional[str] = None
    error: Optional[Exception] = None


@dataclass
class BatchResult:
    """Summary of one processed notification."""

    email_address: str
    cursor: HistoryCursor
    start_cursor: HistoryCursor
    cursor_kind: str
    event_count: int = 0
    results: list[CandidateResult] = field(default_factory=list)

    def _count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    @property
    def persisted(self) -> int:
        return self._count(Outcome.PERSISTED)

    @property
    def skipped(self) -> int:
        return self._count(Outcome.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(Outcome.FAILED)

    def summary(self) -> dict:
        return {
            "email_address": self.email_address,
            "history_id": self.cursor.value,
            "start_history_id": self.start_cursor.value,
            "cursor": self.cursor_kind,
            "events": self.event_count,
            "candidates": len(self.results),
            "persisted": self.persisted,
            "skipped": self.skipped,
            "failed": self.failed,
        }
