"""Content detection and segmentation for siftview-mcp."""

from .cache import AnalysisCache, CacheEntry, CacheStatistics
from .detector import ContentDetector, detect_content, normalize_extension
from .models import ContentKind, DetectionMethod, DetectionResult, Segment
from .segmenter import ContentSegmenter, classify_line, detect_segments

__all__ = [
    "AnalysisCache",
    "CacheEntry",
    "CacheStatistics",
    "ContentDetector",
    "ContentKind",
    "ContentSegmenter",
    "DetectionMethod",
    "DetectionResult",
    "Segment",
    "classify_line",
    "detect_content",
    "detect_segments",
    "normalize_extension",
]
