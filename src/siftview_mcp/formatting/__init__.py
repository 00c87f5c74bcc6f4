"""Pretty-printing of buffers by content kind."""

from .formatters import (
    FORMATTERS,
    format_csv,
    format_json,
    format_properties,
    format_xml,
    format_yaml,
    get_formatter,
)
from .segmented import SegmentedFormatter, coerce_segments, format_content_segmented

__all__ = [
    "FORMATTERS",
    "SegmentedFormatter",
    "coerce_segments",
    "format_content_segmented",
    "format_csv",
    "format_json",
    "format_properties",
    "format_xml",
    "format_yaml",
    "get_formatter",
]
