"""Tests for the container inclusion policy.

These tests verify:
1. Each rule in isolation
2. The precedence between rules
3. Pattern compilation errors at construction
"""

import pytest

from dockwatch.errors import ConfigError
from dockwatch.events.policy import InclusionPolicy


# --- Individual rules ---

def test_default_allows_everything():
    policy = InclusionPolicy()

    assert policy.decide("anything") == (True, "default")


def test_exclude_list_denies_listed_names():
    policy = InclusionPolicy(excludes=["worker"])

    assert policy.decide("worker") == (False, "excludes")
    assert policy.decide("api") == (True, "default")


def test_include_list_allows_only_listed_names():
    policy = InclusionPolicy(includes=["api", "web"])

    assert policy.decide("api") == (True, "includes")
    assert policy.decide("worker") == (False, "includes")


def test_includes_pattern():
    policy = InclusionPolicy(includes_pattern="^web-")

    assert policy.decide("web-1") == (True, "includes_pattern")
    assert policy.decide("api") == (False, "includes_pattern")


def test_excludes_pattern():
    policy = InclusionPolicy(excludes_pattern="^tmp")

    assert policy.decide("tmp-builder") == (False, "excludes_pattern")
    assert policy.decide("api") == (True, "excludes_pattern")


def test_patterns_are_searched_not_anchored():
    policy = InclusionPolicy(includes_pattern="web")

    assert policy.is_allowed("my-web-2")


# --- Precedence ---

def test_includes_pattern_beats_exclude_list():
    policy = InclusionPolicy(excludes=["web-1"], includes_pattern="^web")

    assert policy.is_allowed("web-1")


def test_includes_pattern_beats_excludes_pattern():
    policy = InclusionPolicy(includes_pattern="^web", excludes_pattern="web")

    assert policy.decide("web-1") == (True, "includes_pattern")
    assert policy.decide("api") == (False, "includes_pattern")


def test_excludes_pattern_beats_include_list():
    policy = InclusionPolicy(includes=["api"], excludes_pattern="^tmp")

    # the include list is never consulted once a pattern is set
    assert policy.is_allowed("worker")
    assert not policy.is_allowed("tmp")


def test_include_list_makes_exclude_list_dead():
    policy = InclusionPolicy(excludes=["api"], includes=["api"])

    assert policy.decide("api") == (True, "includes")
    assert policy.decide("worker") == (False, "includes")


def test_exclude_list_only_is_default_allow():
    policy = InclusionPolicy(excludes=["worker"])

    assert policy.is_allowed("api")
    assert not policy.is_allowed("worker")


def test_empty_patterns_are_disabled():
    policy = InclusionPolicy(includes_pattern="", excludes_pattern="")

    assert policy.includes_regexp is None
    assert policy.excludes_regexp is None
    assert policy.is_allowed("anything")


# --- Construction errors ---

@pytest.mark.parametrize("field", ["includes_pattern", "excludes_pattern"])
def test_invalid_pattern_raises_config_error(field):
    with pytest.raises(ConfigError) as exc_info:
        InclusionPolicy(**{field: "("})

    assert exc_info.value.field == field
    assert exc_info.value.pattern == "("
    assert field in str(exc_info.value)
