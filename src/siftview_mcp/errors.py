"""Error types raised by the content-analysis engine."""

from typing import Any


class ContentAnalysisError(Exception):
    """Base class for content-analysis errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "ANALYSIS_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = details or {}


class ContentTooLargeError(ContentAnalysisError):
    """Buffer exceeds the configured size cap."""

    def __init__(self, size_bytes: int, max_bytes: int, label: str = "content"):
        size_mb = size_bytes / (1024 * 1024)
        max_mb = max_bytes / (1024 * 1024)
        super().__init__(
            f"{label.capitalize()} too large ({size_mb:.1f} MB). "
            f"Maximum size is {max_mb:.1f} MB.",
            "CONTENT_TOO_LARGE",
            {"size_bytes": size_bytes, "max_bytes": max_bytes, "label": label},
        )
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes


class InvalidArgumentsError(ContentAnalysisError, ValueError):
    """Caller contract violation, e.g. a segment outside the buffer."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, "INVALID_ARGUMENTS", details)


class FormatError(ContentAnalysisError, ValueError):
    """A per-kind formatter could not parse its input."""

    def __init__(self, kind: str, message: str):
        super().__init__(f"Cannot format {kind}: {message}", "FORMAT_ERROR", {"kind": kind})
        self.kind = kind
