"""gral.irc: an asyncio IRC client with a stateful ingestion pipeline."""

__version__ = "0.1.0"
