from __future__ import annotations
from typing import Optional, Protocol

from inboxbridge.domain.entities.history import HistoryCursor
from inboxbridge.domain.entities.watch import CursorAdvance, WatchState


class CursorStore(Protocol):
    def load(self, email_address: str) -> Optional[WatchState]: ...
    def advance(self, email_address: str, cursor: HistoryCursor) -> CursorAdvance: ...
    def save_watch(self, state: WatchState) -> None: ...
