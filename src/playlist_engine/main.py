#!/usr/bin/env python3
"""Main entry point: hosts the advancement scheduler until a shutdown signal."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import logging.config
import signal
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from playlist_engine.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from playlist_engine.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parent / "logging_config.json"

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, _LOGGING_CONFIG_PATH)

    logging.getLogger().setLevel(resolved_level)


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()

    def _on_signal(name: str) -> None:
        logger.info(LogTemplates.APP_SHUTDOWN_SIGNAL, name)
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows event loops; Ctrl+C still raises KeyboardInterrupt there.
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, _on_signal, sig.name)


async def run(
    settings: Settings,
    *,
    stop_event: asyncio.Event | None = None,
    install_signal_handlers: bool = True,
) -> None:
    """Build the container, run until ``stop_event`` is set, then shut down."""
    from playlist_engine.config.container import create_container

    stop = stop_event or asyncio.Event()
    if install_signal_handlers:
        _install_signal_handlers(stop)

    container = create_container(settings)
    await container.initialize()
    try:
        logger.info(LogTemplates.APP_READY)
        await stop.wait()
    finally:
        await container.shutdown()


def main() -> int:
    from playlist_engine.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info(LogTemplates.APP_STARTING, settings.environment)

    try:
        asyncio.run(run(settings))
        logger.info(LogTemplates.APP_STOPPED)
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.APP_STOPPED)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.APP_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
