"""Replay a single Gmail notification by hand (same path as the push endpoint)."""

from __future__ import annotations

import argparse

from loguru import logger

from inboxbridge.domain.errors import BatchFatalError
from inboxbridge.infrastructure import get_settings
from inboxbridge.infrastructure.log_config import configure_logging
from inboxbridge.infrastructure.wiring import build_process_notification


def main() -> int:
    parser = argparse.ArgumentParser(description="Process one Gmail history notification")
    parser.add_argument("--email", required=True, help="Mailbox address from the notification")
    parser.add_argument("--history-id", required=True, help="historyId from the notification")
    parser.add_argument("--workers", type=int, default=None, help="Override max_workers for this run")
    args = parser.parse_args()

    settings = get_settings()
    if args.workers is not None:
        settings = settings.model_copy(update={"max_workers": args.workers})
    configure_logging(settings.log_level)

    uc = build_process_notification(settings)
    try:
        result = uc.run(args.email, args.history_id)
    except BatchFatalError as e:
        logger.error(f"Notification failed: {e}")
        return 1

    s = result.summary()
    print(
        f"{s['email_address']}: {s['events']} events from {s['start_history_id']} -> "
        f"{s['persisted']} persisted, {s['skipped']} skipped, {s['failed']} failed"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
