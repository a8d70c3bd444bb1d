from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from inboxbridge.domain.entities.history import HistoryCursor


@dataclass(frozen=True)
class WatchRegistration:
    # users.watch response
    cursor: HistoryCursor
    expiration: Optional[int] = None  # epoch millis


@dataclass(frozen=True)
class WatchState:
    """Per-mailbox watch document, keyed by email address."""

    email_address: str
    cursor: HistoryCursor
    previous_cursor: Optional[HistoryCursor] = None
    account_id: Optional[str] = None
    expiration: Optional[int] = None


@dataclass(frozen=True)
class CursorAdvance:
    """Result of applying a notification cursor to the stored watch state.

    ``start`` is where history resolution begins. ``write`` is the state to
    persist, or None when the stored cursor must stay as it is.
    """

    start: HistoryCursor
    write: Optional[WatchState]
    kind: str  # "advanced" | "redelivered" | "stale" | "unregistered"


def plan_cursor_advance(
    email_address: str,
    stored: Optional[WatchState],
    incoming: HistoryCursor,
) -> CursorAdvance:
    """Decide the query start and the new watch state for an incoming cursor.

    The stored cursor never moves backward (for numeric cursors, see
    ``HistoryCursor.precedes``), and a redelivered notification
    resolves history from the same starting point as its first delivery.
    """
    if stored is None:
        return CursorAdvance(
            start=incoming,
            write=WatchState(email_address=email_address, cursor=incoming),
            kind="unregistered",
        )

    if incoming == stored.cursor:
        return CursorAdvance(
            start=stored.previous_cursor or incoming,
            write=None,
            kind="redelivered",
        )

    if incoming.precedes(stored.cursor):
        return CursorAdvance(start=incoming, write=None, kind="stale")

    return CursorAdvance(
        start=stored.cursor,
        write=WatchState(
            email_address=email_address,
            cursor=incoming,
            previous_cursor=stored.cursor,
            account_id=stored.account_id,
            expiration=stored.expiration,
        ),
        kind="advanced",
    )
