"""Shared pytest fixtures for notifier tests."""
from __future__ import annotations

import pytest

from dockwatch.errors import CollectorError
from dockwatch.events.base import ContainerCollector
from dockwatch.events.notifier import EventNotifier


@pytest.fixture
def make_notifier():
    """Build notifiers and stop their listeners after the test."""
    created: list[EventNotifier] = []

    def _make(collector: ContainerCollector, **kwargs) -> EventNotifier:
        notifier = EventNotifier(collector, **kwargs)
        created.append(notifier)
        return notifier

    yield _make

    for notifier in created:
        notifier.stop(timeout=2.0)


@pytest.fixture
def list_failure() -> CollectorError:
    return CollectorError("can't list containers: connection refused")
