"""SiftView - content detection, formatting and diffing engine with an MCP surface."""

__version__ = "0.1.0"

from .content_detection import (
    ContentKind,
    DetectionMethod,
    DetectionResult,
    Segment,
    detect_content,
    detect_segments,
)
from .diffing import (
    ChangedBlock,
    DiffResult,
    StructuredDiff,
    UnchangedBlock,
    compute_diff,
    compute_diff_structured,
    relabel_unified_diff,
)
from .errors import (
    ContentAnalysisError,
    ContentTooLargeError,
    FormatError,
    InvalidArgumentsError,
)
from .formatting import format_content_segmented, format_json

__all__ = [
    "ChangedBlock",
    "ContentAnalysisError",
    "ContentKind",
    "ContentTooLargeError",
    "DetectionMethod",
    "DetectionResult",
    "DiffResult",
    "FormatError",
    "InvalidArgumentsError",
    "Segment",
    "StructuredDiff",
    "UnchangedBlock",
    "compute_diff",
    "compute_diff_structured",
    "detect_content",
    "detect_segments",
    "format_content_segmented",
    "format_json",
    "relabel_unified_diff",
    "__version__",
]
