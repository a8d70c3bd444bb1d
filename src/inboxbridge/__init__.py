"""Gmail push-notification ingestion bridge."""

__version__ = "0.1.0"
