"""Container lifecycle event notification.

This package turns the container runtime's event stream into uniform
start/stop events:

- EventNotifier: snapshot of running containers plus a live listener
- InclusionPolicy: include/exclude rules over resolved container names
- resolve_name / resolve_group: logical name and group heuristics
- DockerCollector: Docker Engine API access
"""

from dockwatch.events.base import ContainerCollector, ContainerInfo, Event, EventFeed, RawEvent
from dockwatch.events.docker_collector import DockerCollector
from dockwatch.events.naming import resolve_group, resolve_name
from dockwatch.events.notifier import DOWN_STATUSES, UP_STATUSES, EventNotifier
from dockwatch.events.policy import InclusionPolicy

__all__ = [
    "ContainerCollector",
    "ContainerInfo",
    "DOWN_STATUSES",
    "DockerCollector",
    "Event",
    "EventFeed",
    "EventNotifier",
    "InclusionPolicy",
    "RawEvent",
    "UP_STATUSES",
    "resolve_group",
    "resolve_name",
]
