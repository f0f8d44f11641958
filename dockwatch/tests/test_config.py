"""Tests for environment-driven settings."""

from dockwatch.config import Settings


def test_defaults(monkeypatch):
    for name in (
        "DOCKWATCH_EXCLUDES",
        "DOCKWATCH_INCLUDES",
        "DOCKWATCH_INCLUDES_PATTERN",
        "DOCKWATCH_EXCLUDES_PATTERN",
        "DOCKWATCH_BUFFER_SIZE",
        "DOCKWATCH_DOCKER_HOST",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.docker_host == ""
    assert settings.buffer_size == 100
    assert settings.exclude_list == []
    assert settings.include_list == []
    assert settings.includes_pattern == ""
    assert settings.excludes_pattern == ""


def test_name_lists_are_comma_separated(monkeypatch):
    monkeypatch.setenv("DOCKWATCH_EXCLUDES", "worker, cron,,  ")
    monkeypatch.setenv("DOCKWATCH_INCLUDES", "api")

    settings = Settings()

    assert settings.exclude_list == ["worker", "cron"]
    assert settings.include_list == ["api"]


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DOCKWATCH_INCLUDES_PATTERN", "^web-")
    monkeypatch.setenv("DOCKWATCH_BUFFER_SIZE", "500")
    monkeypatch.setenv("DOCKWATCH_LOG_FORMAT", "text")

    settings = Settings()

    assert settings.includes_pattern == "^web-"
    assert settings.buffer_size == 500
    assert settings.log_format == "text"
