"""Command-line entry point.

Watches the local Docker daemon and logs one line per container start/stop
event. A lost event feed is fatal: the process exits with status 1 so a
supervisor (systemd, docker restart policy) can start it again.
"""
from __future__ import annotations

import asyncio
import logging
import socket
import sys

from dockwatch.config import settings
from dockwatch.errors import CollectorError, ConfigError, ListenerError
from dockwatch.events import DockerCollector, EventNotifier
from dockwatch.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def consume(notifier: EventNotifier) -> None:
    """Log every event from the notifier until its listener stops."""
    async for event in notifier.stream():
        state = "started" if event.status else "stopped"
        logger.info(f"container {event.container_name} {state}", extra=event.to_dict())


def create_notifier(collector: DockerCollector) -> EventNotifier:
    return EventNotifier(
        collector,
        excludes=settings.exclude_list,
        includes=settings.include_list,
        includes_pattern=settings.includes_pattern,
        excludes_pattern=settings.excludes_pattern,
        buffer_size=settings.buffer_size,
    )


def main() -> int:
    setup_logging(socket.gethostname())

    try:
        collector = DockerCollector(settings.docker_host or None, timeout=settings.docker_timeout)
    except CollectorError as e:
        logger.error(f"Failed to connect to docker: {e}")
        return 1

    try:
        try:
            notifier = create_notifier(collector)
        except (ConfigError, CollectorError) as e:
            logger.error(f"Failed to create event notifier: {e}")
            return 1

        try:
            asyncio.run(consume(notifier))
        except ListenerError as e:
            logger.error(f"Exiting, {e}")
            return 1
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")
            notifier.stop()
        return 0
    finally:
        collector.close()


if __name__ == "__main__":
    sys.exit(main())
