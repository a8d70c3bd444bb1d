"""Run the push-notification API with uvicorn."""

from __future__ import annotations

import uvicorn

from inboxbridge.infrastructure import get_settings


def main() -> int:
    settings = get_settings()
    uvicorn.run(
        "inboxbridge.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
