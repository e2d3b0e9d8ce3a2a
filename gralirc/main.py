#!/usr/bin/env python3
"""
Main entry point for the gral.irc client
"""

import asyncio
import logging
import sys

from .config import ClientConfig, get_configuration
from .errors.handling import log_error
from .errors.internal import ConfigError
from .irc.client import IRCClient

# Configure logging after imports to prevent other modules from configuring it
from .logging_config import LoggerConfigurator
from .logs.logger import logger

configurator = LoggerConfigurator()
configurator.configure()


def print_config_summary(config: ClientConfig) -> None:
    logging.info(
        f"📋 Server {config.host}:{config.port} nick={config.nick} "
        f"autojoin={', '.join(config.autojoin) or '-'}"
    )


async def run_client(config: ClientConfig) -> None:
    """Connect, register and run the read loop until the stream ends."""
    client = IRCClient(config)
    if not await client.connect():
        return
    try:
        await client.listen()
    finally:
        await client.disconnect()


async def main() -> None:
    """Main entry point for the gral.irc application.

    Loads the configuration and runs one client session. A configuration
    error is fatal.

    Raises:
        SystemExit: If the configuration is invalid or startup fails.
    """
    try:
        print("🚀 Starting gral.irc")
        config = get_configuration()
        print_config_summary(config)
        await run_client(config)
    except asyncio.CancelledError:
        raise
    except KeyboardInterrupt:
        pass
    except ConfigError as e:
        logger.log_event("app", "load_error", level=logging.ERROR, error=str(e))
        log_error("Configuration error", e)
        sys.exit(1)
    except Exception as e:
        log_error("Main application error", e)
        sys.exit(1)
    finally:
        logging.info("✅ Application shutdown complete")


def run() -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: If a critical error occurs during execution.
    """
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
