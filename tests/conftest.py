"""Shared fakes for the mail service, cursor store and record sink."""

from __future__ import annotations

import threading
from typing import Iterable, Optional

import pytest

from inboxbridge.domain.entities.email_message import EmailRecord, Header, MessageContent, MessagePart
from inboxbridge.domain.entities.history import (
    ChangeEvent,
    HistoryCursor,
    LabelChangeEvent,
    MessageAddedEvent,
)
from inboxbridge.domain.entities.watch import (
    CursorAdvance,
    WatchRegistration,
    WatchState,
    plan_cursor_advance,
)


def make_content(
    message_id: str = "m1",
    *,
    mime_type: str = "multipart/alternative",
    body: Optional[str] = None,
    parts: Optional[list[MessagePart]] = None,
    headers: Optional[list[Header]] = None,
    snippet: str = "snippet",
) -> MessageContent:
    if headers is None:
        headers = [
            Header("From", "alice@example.com"),
            Header("To", "bob@example.com"),
            Header("Subject", f"Subject {message_id}"),
        ]
    if parts is None and mime_type.startswith("multipart/"):
        parts = [MessagePart("text/plain", "VA=="), MessagePart("text/html", "PGI-")]
    return MessageContent(
        id=message_id,
        thread_id=f"t-{message_id}",
        snippet=snippet,
        headers=headers,
        mime_type=mime_type,
        body=body,
        parts=parts,
    )


def added(message_id: Optional[str], thread_id: Optional[str] = None) -> MessageAddedEvent:
    return MessageAddedEvent(message_id=message_id, thread_id=thread_id or f"t-{message_id}")


def labeled(message_id: Optional[str], *labels: str, thread_id: Optional[str] = None) -> LabelChangeEvent:
    return LabelChangeEvent(
        message_id=message_id,
        thread_id=thread_id or f"t-{message_id}",
        label_ids=frozenset(labels),
    )


class FakeMailService:
    def __init__(self) -> None:
        self.history: dict[str, list[ChangeEvent]] = {}
        self.messages: dict[str, object] = {}
        self.history_calls: list[HistoryCursor] = []
        self.get_calls: list[str] = []
        self.watch_calls: list[tuple[list[str], str]] = []
        self.registration = WatchRegistration(cursor=HistoryCursor("100"), expiration=1700000000000)
        self.history_error: Optional[Exception] = None
        self._lock = threading.Lock()

    def list_history(self, start: HistoryCursor) -> list[ChangeEvent]:
        self.history_calls.append(start)
        if self.history_error is not None:
            raise self.history_error
        return list(self.history.get(start.value, []))

    def get_message(self, message_id: str) -> Optional[MessageContent]:
        with self._lock:
            self.get_calls.append(message_id)
        value = self.messages.get(message_id)
        if isinstance(value, Exception):
            raise value
        return value

    def watch(self, label_ids: Iterable[str], topic_name: str) -> WatchRegistration:
        self.watch_calls.append((list(label_ids), topic_name))
        return self.registration


class FakeCursorStore:
    def __init__(self) -> None:
        self.states: dict[str, WatchState] = {}
        self.writes: list[WatchState] = []

    def load(self, email_address: str) -> Optional[WatchState]:
        return self.states.get(email_address)

    def advance(self, email_address: str, cursor: HistoryCursor) -> CursorAdvance:
        plan = plan_cursor_advance(email_address, self.states.get(email_address), cursor)
        if plan.write is not None:
            self.save_watch(plan.write)
        return plan

    def save_watch(self, state: WatchState) -> None:
        self.states[state.email_address] = state
        self.writes.append(state)


class FakeSink:
    def __init__(self) -> None:
        self.records: list[EmailRecord] = []
        self.fail_ids: set[str] = set()
        self._lock = threading.Lock()

    def append(self, record: EmailRecord) -> str:
        from inboxbridge.domain.errors import PersistError

        if record.id in self.fail_ids:
            raise PersistError(record.id, "Store email failed: unavailable")
        with self._lock:
            self.records.append(record)
            return f"doc-{len(self.records)}"


@pytest.fixture
def mail() -> FakeMailService:
    return FakeMailService()


@pytest.fixture
def cursors() -> FakeCursorStore:
    return FakeCursorStore()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()
