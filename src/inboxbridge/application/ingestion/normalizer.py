"""Turn change events into a deduplicated list of candidate messages."""

from __future__ import annotations

from typing import Iterable, Optional

from inboxbridge.domain.entities.history import (
    CandidateMessage,
    ChangeEvent,
    LabelChangeEvent,
    MessageAddedEvent,
)

INTERESTING_LABELS = frozenset({"INBOX", "UNREAD"})


def _same_key(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and a == b


def is_duplicate(
    seen: Iterable[CandidateMessage],
    candidate: CandidateMessage,
    by_thread: bool = True,
) -> bool:
    for kept in seen:
        if _same_key(kept.id, candidate.id):
            return True
        if by_thread and _same_key(kept.thread_id, candidate.thread_id):
            return True
    return False


def to_candidates(
    events: Iterable[ChangeEvent],
    interesting_labels: Iterable[str] = INTERESTING_LABELS,
) -> list[CandidateMessage]:
    """Filter events and map them to candidates, keeping encounter order."""
    labels = frozenset(interesting_labels)
    out: list[CandidateMessage] = []
    for event in events:
        if isinstance(event, LabelChangeEvent):
            if not labels.intersection(event.label_ids):
                continue
        elif not isinstance(event, MessageAddedEvent):
            continue
        out.append(CandidateMessage(id=event.message_id, thread_id=event.thread_id))
    return out


def dedupe(candidates: Iterable[CandidateMessage], by_thread: bool = True) -> list[CandidateMessage]:
    """Keep the first of any candidates sharing an id (or a thread id when ``by_thread``)."""
    kept: list[CandidateMessage] = []
    for candidate in candidates:
        if not is_duplicate(kept, candidate, by_thread=by_thread):
            kept.append(candidate)
    return kept


def normalize(
    events: Iterable[ChangeEvent],
    interesting_labels: Iterable[str] = INTERESTING_LABELS,
    by_thread: bool = True,
) -> list[CandidateMessage]:
    """Candidates that are new or newly labeled, one per message.

    Label events only count when they add one of ``interesting_labels``.
    Candidates without an id are kept here; the fetch step skips them.
    """
    return dedupe(to_candidates(events, interesting_labels), by_thread=by_thread)
