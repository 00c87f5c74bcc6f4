"""Configuration for siftview-mcp."""

import os
from dataclasses import dataclass, field
from typing import Literal

DEFAULT_MAX_BUFFER_BYTES = 5 * 1024 * 1024
DEFAULT_LEFT_LABEL = "current"
DEFAULT_RIGHT_LABEL = "clipboard"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AnalysisConfig:
    """Limits and defaults for the analysis engine."""

    max_buffer_bytes: int = DEFAULT_MAX_BUFFER_BYTES
    diff_context_lines: int = 3
    left_label: str = DEFAULT_LEFT_LABEL
    right_label: str = DEFAULT_RIGHT_LABEL

    def __post_init__(self):
        """Validate limits and labels."""
        if self.max_buffer_bytes <= 0:
            raise ValueError("max_buffer_bytes must be positive")
        if self.diff_context_lines < 0:
            raise ValueError("diff_context_lines cannot be negative")
        for label in (self.left_label, self.right_label):
            if not label or "\n" in label:
                raise ValueError("Diff labels must be non-empty single-line strings")

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Create configuration from environment variables."""
        return cls(
            max_buffer_bytes=int(
                os.getenv("SIFTVIEW_MAX_BUFFER_BYTES", str(DEFAULT_MAX_BUFFER_BYTES))
            ),
            diff_context_lines=int(os.getenv("SIFTVIEW_DIFF_CONTEXT", "3")),
            left_label=os.getenv("SIFTVIEW_LEFT_LABEL", DEFAULT_LEFT_LABEL),
            right_label=os.getenv("SIFTVIEW_RIGHT_LABEL", DEFAULT_RIGHT_LABEL),
        )


@dataclass
class CacheConfig:
    """Configuration for the server-side analysis cache."""

    enabled: bool = True
    max_size: int = 256
    max_age_seconds: int = 600

    @classmethod
    def from_env(cls) -> "CacheConfig":
        """Create configuration from environment variables."""
        return cls(
            enabled=_env_bool("SIFTVIEW_CACHE_ENABLED", True),
            max_size=int(os.getenv("SIFTVIEW_CACHE_MAX_SIZE", "256")),
            max_age_seconds=int(os.getenv("SIFTVIEW_CACHE_MAX_AGE", "600")),
        )


@dataclass
class ServerConfig:
    """Configuration for the MCP transport."""

    transport: Literal["stdio", "http", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    path: str = "/mcp/"

    def __post_init__(self):
        """Validate transport."""
        if self.transport not in ("stdio", "http", "sse"):
            raise ValueError(f"Unsupported transport: {self.transport}")

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Create configuration from environment variables."""
        return cls(
            transport=os.getenv("MCP_TRANSPORT", "stdio").lower(),
            host=os.getenv("MCP_HOST", "127.0.0.1"),
            port=int(os.getenv("MCP_PORT", "8000")),
            path=os.getenv("MCP_PATH", "/mcp/"),
        )


@dataclass
class SiftViewConfig:
    """Main configuration for siftview-mcp."""

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls) -> "SiftViewConfig":
        """Create configuration from environment variables."""
        return cls(
            analysis=AnalysisConfig.from_env(),
            cache=CacheConfig.from_env(),
            server=ServerConfig.from_env(),
        )
