"""Tests for container name and group resolution."""

import pytest

from dockwatch.events.naming import (
    LABEL_CONTAINER_NAME,
    LABEL_GROUP_NAME,
    image_group,
    resolve_group,
    resolve_name,
)


# --- Name resolution ---

@pytest.mark.parametrize(
    "raw_name, expected",
    [
        ("service.3.abcdef", "service-3"),
        ("/service.3.abcdef", "service-3"),
        ("web.12.x1y2z3", "web-12"),
        # service part is greedy
        ("my.app.1.task", "my.app-1"),
    ],
)
def test_swarm_name(raw_name, expected):
    assert resolve_name({}, raw_name) == expected


def test_swarm_name_wins_over_label():
    labels = {LABEL_CONTAINER_NAME: "custom"}

    assert resolve_name(labels, "service.3.abcdef") == "service-3"


def test_label_name_for_plain_container():
    labels = {LABEL_CONTAINER_NAME: "X"}

    assert resolve_name(labels, "/worker") == "X"


def test_empty_label_is_ignored():
    labels = {LABEL_CONTAINER_NAME: ""}

    assert resolve_name(labels, "/worker") == "worker"


def test_plain_name_strips_single_leading_slash():
    assert resolve_name({}, "/worker") == "worker"
    assert resolve_name({}, "worker") == "worker"
    assert resolve_name({}, "//worker") == "/worker"


@pytest.mark.parametrize("raw_name", ["web.2", "web.x.abc", "web-2-abc"])
def test_non_swarm_names_are_kept(raw_name):
    assert resolve_name({}, raw_name) == raw_name


# --- Group resolution ---

@pytest.mark.parametrize(
    "image, expected",
    [
        ("registry/group/image:tag", "group"),
        ("umputun/system/logger:latest", "system"),
        ("docker.io/library/nginx:1.25", "library"),
        ("myorg/api:latest", ""),
        ("nginx:latest", ""),
        ("", ""),
    ],
)
def test_image_group(image, expected):
    assert image_group(image) == expected


def test_group_label_overrides_image():
    labels = {LABEL_GROUP_NAME: "billing"}

    assert resolve_group(labels, "registry/group/image:tag") == "billing"
    assert resolve_group(labels, "nginx") == "billing"


def test_empty_group_label_falls_back_to_image():
    labels = {LABEL_GROUP_NAME: ""}

    assert resolve_group(labels, "registry/group/image:tag") == "group"


def test_resolution_is_idempotent():
    labels = {LABEL_CONTAINER_NAME: "api", LABEL_GROUP_NAME: "backend"}

    first = (resolve_name(labels, "/api_1"), resolve_group(labels, "r/g/i"))
    second = (resolve_name(labels, "/api_1"), resolve_group(labels, "r/g/i"))

    assert first == second == ("api", "backend")
