"""Docker SDK implementation of the container runtime collaborator.

Docker errors and transport failures (requests raises OSError subclasses)
are converted to CollectorError so callers deal with one error type.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterator

import docker
from docker.errors import DockerException

from dockwatch.errors import CollectorError
from dockwatch.events.base import ContainerCollector, ContainerInfo, EventFeed, RawEvent

logger = logging.getLogger(__name__)


class DockerEventFeed(EventFeed):
    """Wraps the blocking stream returned by DockerClient.events()."""

    def __init__(self, stream):
        self._stream = stream
        self._closed = threading.Event()

    def __iter__(self) -> Iterator[RawEvent]:
        try:
            for payload in self._stream:
                yield RawEvent.from_docker(payload)
        except (DockerException, OSError, ValueError) as e:
            # Closing the stream from another thread breaks the pending read
            if self._closed.is_set():
                return
            raise CollectorError(f"docker event stream failed: {e}") from e

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        try:
            self._stream.close()
        except (DockerException, OSError) as e:
            logger.debug(f"Error closing docker event stream: {e}")


class DockerCollector(ContainerCollector):
    """Lists and watches containers through the Docker Engine API."""

    def __init__(self, base_url: str | None = None, timeout: int = 60):
        """Connect to the Docker daemon.

        Args:
            base_url: Daemon URL, e.g. unix:///var/run/docker.sock. Falls back
                to the environment (DOCKER_HOST) when empty.
            timeout: API request timeout in seconds

        Raises:
            CollectorError: If the client cannot be created
        """
        try:
            if base_url:
                self._client = docker.DockerClient(base_url=base_url, timeout=timeout)
            else:
                self._client = docker.from_env(timeout=timeout)
        except DockerException as e:
            raise CollectorError(f"can't connect to docker: {e}") from e

    def list_running(self) -> list[ContainerInfo]:
        try:
            # sparse keeps the list-API shape and skips a per-container inspect
            containers = self._client.containers.list(sparse=True)
        except (DockerException, OSError) as e:
            raise CollectorError(f"can't list containers: {e}") from e
        return [ContainerInfo.from_docker(c.attrs) for c in containers]

    def subscribe(self) -> DockerEventFeed:
        try:
            stream = self._client.events(decode=True, filters={"type": "container"})
        except (DockerException, OSError) as e:
            raise CollectorError(f"can't subscribe to docker events: {e}") from e
        return DockerEventFeed(stream)

    def close(self) -> None:
        try:
            self._client.close()
        except (DockerException, OSError) as e:
            logger.debug(f"Error closing docker client: {e}")
