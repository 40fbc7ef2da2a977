"""
Pydantic settings models for web-surf.

All browser policy defaults live here and are handed to the browser at
construction time; nothing is read from module-level globals.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class BrowserSettings(BaseModel):
    """Navigation policy and transport configuration."""

    user_agent: str | None = Field(
        default=None,
        description="User-Agent header value. None generates a web-surf agent string.",
    )
    send_referer: bool = Field(
        default=True,
        description="Send the Referer header when following links and submitting forms",
    )
    handle_meta_refresh: bool = Field(
        default=True,
        description="Reload pages that carry a <meta http-equiv=\"refresh\"> tag",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow Location headers on 3xx responses",
    )
    max_redirects: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Maximum redirect hops followed for one request",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=600.0,
        description="Network timeout for a single request in seconds",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify TLS certificates",
    )
    max_history: int | None = Field(
        default=None,
        ge=1,
        description="Maximum pages kept for back(). None means unbounded.",
    )
    parser: Literal["html.parser", "lxml", "html5lib"] = Field(
        default="html.parser",
        description="BeautifulSoup parser backend",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers sent with every request",
    )


class BookmarkSettings(BaseModel):
    """Bookmark store configuration."""

    file_path: Path | None = Field(
        default=None,
        description="JSON file holding bookmarks. None keeps them in memory.",
    )

    @field_validator("file_path", mode="before")
    @classmethod
    def convert_file_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum logging level",
    )
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log message format string",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log timestamps",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path to log file. None means console only.",
    )
    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum log file size before rotation",
    )
    backup_count: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Number of backup log files to keep",
    )
    log_to_console: bool = Field(
        default=True,
        description="Whether to output logs to console",
    )

    @field_validator("file_path", mode="before")
    @classmethod
    def convert_file_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class Settings(BaseModel):
    """
    Root configuration model containing all subsystem settings.

    Settings are loaded from YAML with environment variable overrides.
    """

    browser: BrowserSettings = Field(
        default_factory=BrowserSettings,
        description="Navigation policy and transport settings",
    )
    bookmarks: BookmarkSettings = Field(
        default_factory=BookmarkSettings,
        description="Bookmark store settings",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    model_config = {
        "extra": "forbid",
        "validate_default": True,
    }
