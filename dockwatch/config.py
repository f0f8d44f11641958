"""Notifier configuration."""

from pydantic_settings import BaseSettings


def _split_names(value: str) -> list[str]:
    return [name.strip() for name in value.split(",") if name.strip()]


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Docker connection, empty host means DOCKER_HOST or the local socket
    docker_host: str = ""
    docker_timeout: int = 60

    # Container filtering
    excludes: str = ""  # comma-separated container names
    includes: str = ""  # comma-separated container names
    includes_pattern: str = ""  # regex, overrides every other filter
    excludes_pattern: str = ""  # regex, overrides the name lists

    # Output channel capacity, grown at startup to fit the running containers
    buffer_size: int = 100

    # Logging configuration
    log_format: str = "json"  # "json" or "text"
    log_level: str = "INFO"

    class Config:
        env_prefix = "DOCKWATCH_"

    @property
    def exclude_list(self) -> list[str]:
        return _split_names(self.excludes)

    @property
    def include_list(self) -> list[str]:
        return _split_names(self.includes)


settings = Settings()
