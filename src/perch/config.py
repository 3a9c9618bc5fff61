"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, routes="minimal")
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    backlog: int = 2048
    graceful_timeout: float | None = None  # None = wait for in-flight requests

    # Routes: a route set name ("full", "minimal") or explicit paths
    routes: str | tuple[str, ...] = "full"

    # Assets: None serves the copies bundled with the package
    asset_dir: str | Path | None = None

    # Logging
    log_level: str = "info"
    access_log: bool = False

    @property
    def address(self) -> str:
        """``host:port`` as printed in the ready message."""
        return f"{self.host}:{self.port}"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any field is out of range."""
        if not 0 <= self.port <= 65535:
            msg = f"Port must be between 0 and 65535, got {self.port}."
            raise ConfigurationError(msg)
        if self.backlog < 1:
            msg = f"Backlog must be positive, got {self.backlog}."
            raise ConfigurationError(msg)
        if self.graceful_timeout is not None and self.graceful_timeout < 0:
            msg = f"Graceful timeout cannot be negative, got {self.graceful_timeout}."
            raise ConfigurationError(msg)
