"""Event types and the container runtime collaborator interface.

Raw runtime payloads are loosely typed mappings. ContainerInfo and RawEvent
are narrow views over them: only the documented keys are read, everything
else is ignored and missing keys fall back to empty values.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping


def _utc(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


@dataclass(frozen=True)
class Event:
    """A container start/stop notification.

    Attributes:
        container_id: Runtime container ID
        container_name: Resolved logical container name
        group: Resolved group, empty if none could be derived
        ts: When the container was created (snapshot) or the transition happened
        status: True for started, False for stopped
    """

    container_id: str
    container_name: str
    group: str
    ts: datetime
    status: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "container_id": self.container_id,
            "container_name": self.container_name,
            "group": self.group,
            "ts": self.ts.isoformat(),
            "status": self.status,
        }


@dataclass(frozen=True)
class ContainerInfo:
    """A running container as reported by the runtime's listing."""

    id: str
    names: tuple[str, ...] = ()
    labels: Mapping[str, str] = field(default_factory=dict)
    image: str = ""
    created: int = 0  # epoch seconds

    @classmethod
    def from_docker(cls, attrs: Mapping[str, Any]) -> ContainerInfo:
        """Build from a Docker list-containers entry (Id, Names, Labels, Image, Created)."""
        return cls(
            id=attrs.get("Id") or "",
            names=tuple(attrs.get("Names") or ()),
            labels=dict(attrs.get("Labels") or {}),
            image=attrs.get("Image") or "",
            created=int(attrs.get("Created") or 0),
        )

    @property
    def name(self) -> str:
        """Primary name, still carrying the runtime's leading slash."""
        return self.names[0] if self.names else ""

    @property
    def timestamp(self) -> datetime:
        return _utc(self.created)


@dataclass(frozen=True)
class RawEvent:
    """A message from the runtime's event feed."""

    object_type: str
    status: str
    actor_id: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    image: str = ""
    time: int = 0  # epoch seconds
    time_nano: int = 0  # epoch nanoseconds

    @classmethod
    def from_docker(cls, payload: Mapping[str, Any]) -> RawEvent:
        """Build from a decoded Docker Events API message.

        Newer API versions drop the legacy "status", "id" and "from" fields,
        so each falls back to its current equivalent.
        """
        actor = payload.get("Actor") or {}
        attributes = dict(actor.get("Attributes") or {})
        return cls(
            object_type=payload.get("Type") or "",
            status=payload.get("status") or payload.get("Action") or "",
            actor_id=actor.get("ID") or payload.get("id") or "",
            attributes=attributes,
            image=payload.get("from") or attributes.get("image", ""),
            time=int(payload.get("time") or 0),
            time_nano=int(payload.get("timeNano") or 0),
        )

    @property
    def name(self) -> str:
        return self.attributes.get("name", "")

    @property
    def timestamp(self) -> datetime:
        if self.time_nano:
            return _utc(self.time_nano / 1e9)
        return _utc(self.time)


class EventFeed(ABC):
    """A live subscription to the runtime's event stream.

    Iteration blocks until the next event arrives. It ends, or raises
    CollectorError, when the stream is lost. close() may be called from
    another thread to unblock a pending read.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[RawEvent]:
        pass

    @abstractmethod
    def close(self) -> None:
        pass


class ContainerCollector(ABC):
    """Access to the container runtime.

    Implementations raise CollectorError for transport or auth failures.
    """

    @abstractmethod
    def list_running(self) -> list[ContainerInfo]:
        """List currently running containers only."""
        pass

    @abstractmethod
    def subscribe(self) -> EventFeed:
        """Open a subscription to the runtime's event feed."""
        pass

    def close(self) -> None:
        """Release the underlying client."""
