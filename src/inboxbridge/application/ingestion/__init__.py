"""History reconciliation and message normalization pipeline."""

from inboxbridge.application.ingestion.decoder import decode
from inboxbridge.application.ingestion.fetcher import MessageFetcher
from inboxbridge.application.ingestion.history_resolver import HistoryResolver
from inboxbridge.application.ingestion.normalizer import INTERESTING_LABELS, dedupe, normalize

__all__ = [
    "decode",
    "MessageFetcher",
    "HistoryResolver",
    "INTERESTING_LABELS",
    "dedupe",
    "normalize",
]
