"""Process one mailbox push notification end to end."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from loguru import logger

from inboxbridge.application.ingestion.decoder import decode
from inboxbridge.application.ingestion.fetcher import MessageFetcher
from inboxbridge.application.ingestion.history_resolver import HistoryResolver
from inboxbridge.application.ingestion.normalizer import INTERESTING_LABELS, normalize
from inboxbridge.application.ports.cursor_store import CursorStore
from inboxbridge.application.ports.mail_service import MailService
from inboxbridge.application.ports.record_sink import RecordSink
from inboxbridge.domain.entities.history import CandidateMessage, HistoryCursor
from inboxbridge.domain.entities.outcome import BatchResult, CandidateResult, Outcome
from inboxbridge.domain.errors import BatchFatalError, PerMessageError


class ProcessNotificationUseCase:
    """Resolve a notification into new messages and persist a record for each.

    Flow:
    1. Advance the stored cursor to the notification's history id
    2. Resolve history events since the previous cursor
    3. Build deduplicated candidates from the events
    4. For each candidate: fetch -> decode -> append to the sink

    Only steps 1 and 2 (and authorization) can fail the notification. Per-message
    failures are logged and recorded as FAILED; the batch still completes.
    """

    def __init__(
        self,
        mail: MailService,
        cursors: CursorStore,
        sink: RecordSink,
        interesting_labels: Iterable[str] = INTERESTING_LABELS,
        dedup_by_thread: bool = True,
        max_workers: int = 1,
    ) -> None:
        """Initialize the notification use case.

        Args:
            mail: Mail service used for history and message lookups
            cursors: Per-mailbox cursor store
            sink: Document sink receiving one record per decoded message
            interesting_labels: Label ids that make a label change a candidate
            dedup_by_thread: Treat candidates sharing a thread id as duplicates
            max_workers: Candidates processed concurrently (1 = sequential)
        """
        self.cursors = cursors
        self.sink = sink
        self.resolver = HistoryResolver(mail)
        self.fetcher = MessageFetcher(mail)
        self.interesting_labels = frozenset(interesting_labels)
        self.dedup_by_thread = dedup_by_thread
        self.max_workers = max(1, max_workers)

    def run(self, email_address: str, history_id: str) -> BatchResult:
        log = logger.bind(mailbox=email_address)
        cursor = HistoryCursor(str(history_id))
        log.debug(f"RECEIVED notification for {email_address} at history {cursor}")

        advance = self.cursors.advance(email_address, cursor)
        if advance.kind == "unregistered":
            log.warning(f"No watch state for {email_address}; starting from notification cursor {cursor}")
        elif advance.kind == "stale":
            log.warning(f"Stale notification {cursor} for {email_address}; stored cursor kept")
        log.debug(f"CURSOR_ADVANCED ({advance.kind}); resolving from {advance.start}")

        result = BatchResult(
            email_address=email_address,
            cursor=cursor,
            start_cursor=advance.start,
            cursor_kind=advance.kind,
        )

        events = self.resolver.resolve(advance.start)
        result.event_count = len(events)
        if not events:
            log.info(f"Notification {cursor} for {email_address}: no history, done")
            return result
        log.debug(f"EVENTS_RESOLVED: {len(events)} events")

        candidates = normalize(events, self.interesting_labels, by_thread=self.dedup_by_thread)
        log.debug(f"CANDIDATES_BUILT: {len(candidates)} candidates")

        result.results = self._process_all(candidates)

        log.info(
            f"Notification {cursor} for {email_address}: "
            f"persisted={result.persisted}, skipped={result.skipped}, failed={result.failed}"
        )
        return result

    def _process_all(self, candidates: list[CandidateMessage]) -> list[CandidateResult]:
        if self.max_workers == 1 or len(candidates) <= 1:
            return [self._process_candidate(c) for c in candidates]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(self._process_candidate, candidates))

    def _process_candidate(self, candidate: CandidateMessage) -> CandidateResult:
        """Fetch, decode and persist a single candidate.

        Returns:
            SKIPPED - no id, no content, or no headers
            FAILED - any error other than a batch-fatal one
            PERSISTED - the record was appended to the sink
        """
        try:
            content = self.fetcher.fetch(candidate.id)
            if content is None:
                reason = "missing_id" if not candidate.id else "no_content"
                return CandidateResult(candidate, Outcome.SKIPPED, reason=reason)

            record = decode(content)
            if record is None:
                return CandidateResult(candidate, Outcome.SKIPPED, reason="missing_headers")

            record_id = self.sink.append(record)
        except BatchFatalError:
            raise
        except PerMessageError as e:
            logger.error(f"Failed to process message {candidate.id}: {e}")
            return CandidateResult(candidate, Outcome.FAILED, reason=type(e).__name__, error=e)
        except Exception as e:
            logger.exception(f"Failed to process message {candidate.id}: {e}")
            return CandidateResult(candidate, Outcome.FAILED, reason=type(e).__name__, error=e)

        logger.debug(f"PERSISTED message {candidate.id} as {record_id}")
        return CandidateResult(candidate, Outcome.PERSISTED, record_id=record_id)
