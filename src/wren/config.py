"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = AppConfig(web_root="public", database_url="sqlite:///app.db")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Relative ``provide()`` paths resolve against this
    web_root: str | Path = "."

    # Data
    database_url: str | None = None
    echo: bool = False  # Log every statement with timing

    # Logging
    log_level: str = "info"
