"""Line diffing for siftview-mcp."""

from .engine import DiffEngine, compute_diff, compute_diff_structured, relabel_unified_diff
from .matcher import LineMatcher, matching_blocks
from .models import ChangedBlock, DiffBlock, DiffResult, StructuredDiff, UnchangedBlock

__all__ = [
    "ChangedBlock",
    "DiffBlock",
    "DiffEngine",
    "DiffResult",
    "LineMatcher",
    "StructuredDiff",
    "UnchangedBlock",
    "compute_diff",
    "compute_diff_structured",
    "matching_blocks",
    "relabel_unified_diff",
]
