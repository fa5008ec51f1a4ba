"""Application configuration management."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="APPLE_MAIL_MCP_",
        env_file=[
            ".env",  # Project-level defaults (lower priority)
            Path.home() / ".config" / "apple-mail-mcp" / ".env",  # User config (higher priority)
        ],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Transport settings
    transport: Literal["stdio", "http"] = Field(
        default="stdio", description="Transport type: stdio or http"
    )
    host: str = Field(
        default="localhost", description="HTTP host (only used with transport=http)"
    )
    port: int = Field(
        default=8787, ge=1, le=65535, description="HTTP port (only used with transport=http)"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug logging of tool calls, results and script logs to stderr",
    )

    # Script execution
    osascript_path: str = Field(
        default="osascript", description="osascript binary used to run JXA scripts"
    )
    script_timeout: float | None = Field(
        default=120.0, gt=0, description="Seconds before a tool's script is killed (None = no limit)"
    )
    startup_timeout: float = Field(
        default=10.0, gt=0, description="Seconds allowed for the Mail.app connectivity check"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Path | None = Field(
        default=None, description="Directory for a rotating log file (stderr only if unset)"
    )
    log_rotation_size_mb: int = Field(
        default=5, ge=1, description="Max size per log file in MB before rotation"
    )
    log_backup_count: int = Field(
        default=3, ge=0, description="Number of rotated log files to keep"
    )

    @property
    def log_rotation_bytes(self) -> int:
        """Rotation size in bytes."""
        return self.log_rotation_size_mb * 1024 * 1024
