"""Segment-aware formatting of a whole buffer."""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..config import DEFAULT_MAX_BUFFER_BYTES
from ..content_detection.detector import ContentDetector
from ..content_detection.models import ContentKind, Segment
from ..errors import FormatError, InvalidArgumentsError
from ..utils.lines import byte_size, is_blank, line_separator, split_lines
from .formatters import get_formatter

logger = logging.getLogger(__name__)

SegmentLike = Union[Segment, Mapping[str, Any]]


def coerce_segments(segments: Iterable[SegmentLike], line_count: int) -> List[Segment]:
    """Validate segments against a buffer of ``line_count`` lines.

    Raises:
        InvalidArgumentsError: A segment lies outside the buffer, or segments
            overlap or are out of order. Stale segments are never clamped.
    """
    result: List[Segment] = []
    previous_end = 0
    for item in segments:
        segment = item if isinstance(item, Segment) else Segment.from_dict(item)
        if segment.end_line > line_count:
            raise InvalidArgumentsError(
                f"Segment {segment.start_line}-{segment.end_line} is outside the buffer "
                f"({line_count} lines); segments may be stale",
                {"segment": segment.to_dict(), "line_count": line_count},
            )
        if segment.start_line <= previous_end:
            raise InvalidArgumentsError(
                f"Segment {segment.start_line}-{segment.end_line} overlaps or precedes "
                f"a previous segment ending at line {previous_end}",
                {"segment": segment.to_dict()},
            )
        result.append(segment)
        previous_end = segment.end_line
    return result


class SegmentedFormatter:
    """Pretty-prints each segment of a buffer according to its kind.

    Lines outside every segment are kept verbatim and in place. A segment
    that fails to parse is emitted unchanged.
    """

    def __init__(
        self,
        detector: Optional[ContentDetector] = None,
        max_bytes: int = DEFAULT_MAX_BUFFER_BYTES,
    ):
        self.detector = detector or ContentDetector(max_bytes=max_bytes)
        self.max_bytes = max_bytes

    def format_chunk(self, chunk: str, kind: ContentKind) -> str:
        """Format one slice, returning it unchanged when it does not parse."""
        formatter = get_formatter(kind)
        if formatter is None:
            return chunk
        try:
            return formatter(chunk)
        except FormatError as e:
            logger.debug(f"Leaving {kind.value} segment unformatted: {e}")
            return chunk

    def _implicit_segments(self, content: str, lines: List[str]) -> List[Segment]:
        """One segment over the non-blank span, tagged with the detected kind."""
        non_blank = [index for index, line in enumerate(lines) if not is_blank(line)]
        if not non_blank:
            return []
        kind = self.detector.detect(content).kind
        return [Segment(non_blank[0] + 1, non_blank[-1] + 1, kind)]

    def format(self, content: str, segments: Iterable[SegmentLike]) -> str:
        """
        Format a buffer segment by segment.

        Args:
            content: Buffer text
            segments: Segments computed for exactly this buffer; when empty the
                buffer is formatted as a whole according to its detected kind

        Returns:
            The formatted view; the input string is never modified

        Raises:
            InvalidArgumentsError: When a segment does not fit the buffer
        """
        lines = split_lines(content)
        checked = coerce_segments(segments, len(lines))

        if byte_size(content) > self.max_bytes:
            logger.warning(f"Content exceeds {self.max_bytes} bytes; returning it unformatted")
            return content

        if not checked:
            checked = self._implicit_segments(content, lines)

        output: List[str] = []
        cursor = 0
        changed = False
        for segment in checked:
            start = segment.start_line - 1
            output.extend(lines[cursor:start])
            chunk = "\n".join(lines[start : segment.end_line])
            formatted = self.format_chunk(chunk, segment.kind)
            changed = changed or formatted != chunk
            output.extend(formatted.split("\n"))
            cursor = segment.end_line
        output.extend(lines[cursor:])

        if not changed:
            return content
        return line_separator(content).join(output)


_default_formatter = SegmentedFormatter()


def format_content_segmented(content: str, segments: Iterable[SegmentLike]) -> str:
    """Format ``content`` according to ``segments`` with the default size cap."""
    return _default_formatter.format(content, segments)
