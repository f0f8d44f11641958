"""Logical container name and group resolution.

Swarm tasks are named "<service>.<replica>.<task-id>"; they collapse to
"<service>-<replica>" so a replica keeps its name across task restarts.
Otherwise the "logger.container.name" label wins over the runtime name.

The group is the "logger.group.name" label, or the path segment of the image
reference, i.e. for umputun/system/logger:latest it is "system".
"""
from __future__ import annotations

import logging
import re
from typing import Mapping

logger = logging.getLogger(__name__)

LABEL_CONTAINER_NAME = "logger.container.name"
LABEL_GROUP_NAME = "logger.group.name"

_SWARM_RE = re.compile(r"(.*)\.(\d+)\.(.*)")
_GROUP_RE = re.compile(r"/(.*?)/")


def resolve_name(labels: Mapping[str, str], raw_name: str) -> str:
    """Resolve the logical name of a container.

    Args:
        labels: Container labels (or event actor attributes)
        raw_name: Runtime name, with or without the leading "/"
    """
    name = raw_name[1:] if raw_name.startswith("/") else raw_name
    match = _SWARM_RE.search(name)
    if match:
        service, replica = match.group(1), match.group(2)
        return f"{service}-{replica}"
    label_name = labels.get(LABEL_CONTAINER_NAME)
    if label_name:
        return label_name
    return name


def image_group(image: str) -> str:
    """Default group: the text between the first two slashes of the image."""
    match = _GROUP_RE.search(image)
    if match:
        return match.group(1)
    logger.debug(f"no group for {image}")
    return ""


def resolve_group(labels: Mapping[str, str], image: str) -> str:
    label_group = labels.get(LABEL_GROUP_NAME)
    if label_group:
        return label_group
    return image_group(image)
