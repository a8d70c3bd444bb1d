"""One-shot Gmail watch registration (or renewal) for a mailbox."""

from __future__ import annotations

import argparse

from loguru import logger

from inboxbridge.domain.errors import BridgeError
from inboxbridge.infrastructure import get_settings
from inboxbridge.infrastructure.log_config import configure_logging
from inboxbridge.infrastructure.wiring import build_setup_watch


def main() -> int:
    parser = argparse.ArgumentParser(description="Start a Gmail watch and store the initial history id")
    parser.add_argument("--email", required=True, help="Mailbox address (watch state key)")
    parser.add_argument("--account-id", default=None, help="Account identity stored with the watch")
    parser.add_argument("--renew", action="store_true", help="Renew an existing watch, keeping its cursor")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)

    uc = build_setup_watch(settings)
    try:
        if args.renew:
            state = uc.renew(args.email)
        else:
            state = uc.run(args.email, account_id=args.account_id)
    except BridgeError as e:
        logger.error(f"Watch setup failed for {args.email}: {e}")
        return 1

    print(f"Watching {state.email_address} on {settings.pubsub_topic_name}")
    print(f"historyId={state.cursor} expiration={state.expiration}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
