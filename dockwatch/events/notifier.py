"""Container start/stop notifier.

EventNotifier publishes a uniform Event for every observable container
lifecycle change:

1. On construction it lists the running containers and queues a "started"
   event for each allowed one (snapshot), before returning.
2. It then starts a background thread that subscribes to the runtime's event
   feed and translates container start/stop transitions for the rest of the
   notifier's life.

Both phases write to the same FIFO channel; snapshot events are always
queued before any live event. The notifier never restarts its listener. If
the feed fails or ends, the failure is logged, recorded as ``error`` and
passed to ``on_failure``; restart policy belongs to the caller.

Publishing live events blocks while the channel is full, so a consumer that
stops reading also delays the listener (and failure detection).
"""
from __future__ import annotations

import asyncio
import logging
import queue
import threading
from datetime import datetime
from typing import AsyncIterator, Callable, Iterable, Mapping

from dockwatch.errors import ConfigError, ListenerError
from dockwatch.events.base import ContainerCollector, Event, RawEvent
from dockwatch.events.naming import resolve_group, resolve_name
from dockwatch.events.policy import InclusionPolicy

logger = logging.getLogger(__name__)

UP_STATUSES = frozenset({"start", "restart"})
DOWN_STATUSES = frozenset({"die", "destroy", "stop", "pause"})

DEFAULT_BUFFER_SIZE = 100

# How often a blocked publish re-checks the stop flag
_PUBLISH_POLL_INTERVAL = 0.5

FailureCallback = Callable[[ListenerError], None]


class EventNotifier:
    """Emits start/stop events for running and future containers.

    Attributes:
        policy: The inclusion policy applied to resolved names
        error: ListenerError recorded when the live listener failed, else None
    """

    def __init__(
        self,
        collector: ContainerCollector,
        excludes: Iterable[str] = (),
        includes: Iterable[str] = (),
        includes_pattern: str = "",
        excludes_pattern: str = "",
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        on_failure: FailureCallback | None = None,
    ):
        """Create the notifier, emit the snapshot and start listening.

        Args:
            collector: Container runtime access
            excludes: Container names to skip
            includes: Container names to watch exclusively
            includes_pattern: Regex of names to watch, empty to disable
            excludes_pattern: Regex of names to skip, empty to disable
            buffer_size: Channel capacity, grown to fit the snapshot
            on_failure: Called from the listener thread if the feed fails

        Raises:
            ConfigError: Invalid pattern or buffer size; nothing is listed
            CollectorError: Running containers could not be listed
        """
        excludes, includes = list(excludes), list(includes)
        logger.debug(
            f"create events notif, excludes: {excludes}, includes: {includes}, "
            f"includes_pattern: {includes_pattern!r}, excludes_pattern: {excludes_pattern!r}"
        )
        if buffer_size < 1:
            raise ConfigError("buffer_size", f"must be positive, got {buffer_size}")

        self.policy = InclusionPolicy(excludes, includes, includes_pattern, excludes_pattern)
        self.error: ListenerError | None = None
        self._collector = collector
        self._on_failure = on_failure
        self._stop_event = threading.Event()
        self._feed_lock = threading.Lock()
        self._feed = None
        self._events: queue.Queue[Event]

        # first get all currently running containers
        self._emit_running(buffer_size)

        self._thread = threading.Thread(
            target=self._listen,
            name="dockwatch-event-listener",
            daemon=True,
        )
        self._thread.start()

    @property
    def channel(self) -> queue.Queue[Event]:
        """FIFO of emitted events. The notifier only writes, callers only read."""
        return self._events

    def _build_event(
        self,
        container_id: str,
        labels: Mapping[str, str],
        raw_name: str,
        image: str,
        status: bool,
        ts: datetime,
    ) -> Event | None:
        """Resolve name and group and apply the policy. None if excluded."""
        container_name = resolve_name(labels, raw_name)
        group = resolve_group(labels, image)
        allowed, rule = self.policy.decide(container_name)
        if not allowed:
            logger.info(f"container {container_name} excluded", extra={"rule": rule})
            return None
        return Event(
            container_id=container_id,
            container_name=container_name,
            group=group,
            ts=ts,
            status=status,
        )

    def _emit_running(self, buffer_size: int) -> None:
        """Queue a started event for every allowed running container."""
        containers = self._collector.list_running()
        logger.debug(f"total containers = {len(containers)}")

        snapshot = []
        for container in containers:
            event = self._build_event(
                container.id,
                container.labels,
                container.name,
                container.image,
                True,
                container.timestamp,
            )
            if event is None:
                continue
            logger.debug(f"running container added, {event}")
            snapshot.append(event)

        # Nobody reads before the constructor returns, so the whole snapshot must fit
        capacity = max(buffer_size, len(snapshot))
        if capacity > buffer_size:
            logger.debug(f"channel capacity raised to {capacity} for the initial emit")
        self._events = queue.Queue(maxsize=capacity)
        for event in snapshot:
            self._events.put_nowait(event)
        logger.debug("completed initial emit")

    def _translate(self, raw: RawEvent) -> Event | None:
        """Convert a raw feed message, None for irrelevant or excluded ones."""
        if raw.object_type != "container":
            return None
        if raw.status not in UP_STATUSES and raw.status not in DOWN_STATUSES:
            return None

        logger.debug(f"api event {raw}")
        return self._build_event(
            raw.actor_id,
            raw.attributes,
            raw.name,
            raw.image,
            raw.status in UP_STATUSES,
            raw.timestamp,
        )

    def _publish(self, event: Event) -> bool:
        """Put an event on the channel, blocking while full. False if stopped."""
        while not self._stop_event.is_set():
            try:
                self._events.put(event, timeout=_PUBLISH_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def _consume_feed(self) -> None:
        feed = self._collector.subscribe()
        with self._feed_lock:
            self._feed = feed
        try:
            if self._stop_event.is_set():
                return
            for raw in feed:
                if self._stop_event.is_set():
                    break
                event = self._translate(raw)
                if event is None:
                    continue
                logger.info(f"new event {event}")
                if not self._publish(event):
                    break
        finally:
            feed.close()

    def _listen(self) -> None:
        """Listener thread body. Any exit not requested by stop() is a failure."""
        try:
            self._consume_feed()
        except Exception as e:
            if self._stop_event.is_set():
                logger.debug(f"Event listener stopped while reading: {e}")
                return
            self._fail(str(e), e)
            return

        if self._stop_event.is_set():
            logger.info("Event listener stopped")
        else:
            self._fail("event feed terminated")

    def _fail(self, reason: str, cause: BaseException | None = None) -> None:
        error = ListenerError(reason)
        error.__cause__ = cause
        self.error = error
        logger.error(f"Event listener failed: {reason}")
        if self._on_failure is not None:
            try:
                self._on_failure(error)
            except Exception as e:
                logger.exception(f"Error in failure callback: {e}")

    def is_running(self) -> bool:
        """Check if the live listener is still running."""
        return self._thread.is_alive()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the listener exits. True if it has exited."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def stop(self, timeout: float | None = 2.0) -> bool:
        """Stop the live listener.

        Sets the stop flag, checked between feed reads, and closes the feed
        to unblock a pending read. Queued events stay on the channel.

        Returns:
            True if the listener thread exited within the timeout
        """
        logger.info("Stopping event listener...")
        self._stop_event.set()
        with self._feed_lock:
            feed = self._feed
        if feed is not None:
            feed.close()
        return self.wait(timeout)

    async def stream(self, poll_interval: float = 1.0) -> AsyncIterator[Event]:
        """Yield channel events from asyncio code.

        Ends once the listener was stopped and the channel is drained.

        The queue read runs in a worker thread that cancelling the consuming
        task does not interrupt; it may still take one event off the channel
        and that event is lost.

        Raises:
            ListenerError: After the channel is drained, if the listener failed
        """
        while True:
            try:
                event = await asyncio.to_thread(self._events.get, timeout=poll_interval)
            except queue.Empty:
                # read the terminal state before emptiness, the last publish precedes it
                error = self.error
                finished = error is not None or not self.is_running()
                if not self._events.empty():
                    continue
                if error is not None:
                    raise error
                if finished:
                    return
                continue
            yield event
