"""
Configuration for OpenShiftMCP.

All settings can be overridden with OPENSHIFTMCP_-prefixed environment
variables, e.g. OPENSHIFTMCP_OC_BINARY=/usr/local/bin/oc.
"""

import logging
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_OUTPUT_BYTES = 10 * 1024 * 1024  # 10 MiB


class Settings(BaseSettings):
    """Server settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="OPENSHIFTMCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Executor
    oc_binary: str = "oc"
    oc_base_args: List[str] = Field(default_factory=list)
    command_timeout: int = 30000  # milliseconds, <= 0 disables
    max_output_bytes: int = MAX_OUTPUT_BYTES
    kill_grace_seconds: float = 5.0

    # Tools
    max_log_requests: int = 5
    logs_timeout: int = 30000

    # Logging
    log_level: str = "INFO"
    structured_logs: bool = False

    # Server
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8765

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("max_output_bytes")
    @classmethod
    def _positive_buffer(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_output_bytes must be positive")
        return value


settings = Settings()
