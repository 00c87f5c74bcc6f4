"""Split a buffer into line-aligned segments of a single content kind."""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from ..config import DEFAULT_MAX_BUFFER_BYTES
from ..utils.lines import byte_size, count_lines, is_blank, split_lines
from .detector import ContentDetector
from .models import ContentKind, Segment

logger = logging.getLogger(__name__)

_PROPERTY_LINE = re.compile(r"^[A-Za-z_][\w.\-]*\s*=")
_YAML_LINE = re.compile(r"^(?:-\s|-$|[\w\"'.\-][^:]*:(?:\s|$))")
_XML_OPEN = re.compile(r"<([A-Za-z_][\w:.\-]*)(?:\s[^<>]*)?(?<!/)>")
_XML_CLOSE = re.compile(r"</[A-Za-z_][\w:.\-]*\s*>")
_VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


def _bracket_delta(line: str) -> int:
    """Net count of opened JSON brackets, ignoring string literals."""
    depth = 0
    in_string = False
    escaped = False
    for char in line:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
    return depth


def _element_delta(line: str) -> int:
    """Net count of opened XML elements on a line, ignoring HTML void tags."""
    opened = [
        name for name in _XML_OPEN.findall(line) if name.lower() not in _VOID_ELEMENTS
    ]
    return len(opened) - len(_XML_CLOSE.findall(line))


def classify_line(line: str) -> ContentKind:
    """Classify a single non-blank line in isolation."""
    stripped = line.strip()
    if stripped.startswith("{") or stripped.startswith("["):
        return ContentKind.JSON
    if "," in stripped and sum(1 for field in stripped.split(",") if field.strip()) >= 2:
        return ContentKind.CSV
    if stripped.startswith("<"):
        return ContentKind.XML
    if stripped.startswith("---"):
        return ContentKind.YAML
    if _PROPERTY_LINE.match(stripped):
        return ContentKind.PROPERTIES
    return ContentKind.TEXT


@dataclass
class _ScanState:
    """Open structures carried from one line to the next."""

    json_depth: int = 0
    xml_depth: int = 0
    in_yaml: bool = False

    def classify(self, line: str) -> ContentKind:
        if self.json_depth > 0:
            kind = ContentKind.JSON
        elif self.xml_depth > 0:
            kind = ContentKind.XML
        elif self.in_yaml and (line[:1].isspace() or _YAML_LINE.match(line.strip())):
            kind = ContentKind.YAML
        else:
            kind = classify_line(line)

        if kind is ContentKind.JSON:
            self.json_depth = max(0, self.json_depth + _bracket_delta(line))
        elif kind is ContentKind.XML:
            self.xml_depth = max(0, self.xml_depth + _element_delta(line))
        self.in_yaml = kind is ContentKind.YAML
        return kind


class ContentSegmenter:
    """Partitions a buffer into ordered, non-overlapping segments.

    Blank lines are skipped: they never start or extend a segment, so a blank
    line between two regions of the same kind yields two segments. A blank line
    also closes any open JSON, XML or YAML region.
    """

    def __init__(
        self,
        detector: Optional[ContentDetector] = None,
        max_bytes: int = DEFAULT_MAX_BUFFER_BYTES,
    ):
        self.detector = detector or ContentDetector(max_bytes=max_bytes)
        self.max_bytes = max_bytes

    def _whole_buffer(self, content: str, hint: Optional[str]) -> List[Segment]:
        hinted = self.detector.detect_from_hint(hint)
        kind = hinted.kind if hinted is not None else ContentKind.TEXT
        return [Segment(1, max(count_lines(content), 1), kind)]

    def segment(self, content: str, hint: Optional[str] = None) -> List[Segment]:
        """
        Segment a buffer.

        Args:
            content: Buffer text
            hint: Optional extension hint, used only when no line is classified

        Returns:
            Segments in ascending line order
        """
        if byte_size(content) > self.max_bytes:
            logger.warning(
                f"Content exceeds {self.max_bytes} bytes; returning a single segment"
            )
            return self._whole_buffer(content, hint)

        segments: List[Segment] = []
        state = _ScanState()

        for index, line in enumerate(split_lines(content)):
            if is_blank(line):
                state = _ScanState()
                continue
            line_number = index + 1
            kind = state.classify(line)

            if segments:
                current = segments[-1]
                if current.kind is kind and current.end_line + 1 == line_number:
                    segments[-1] = current.extended_to(line_number)
                    continue
            segments.append(Segment(line_number, line_number, kind))

        if not segments:
            return self._whole_buffer(content, hint)

        logger.debug(f"Segmented {count_lines(content)} lines into {len(segments)} segments")
        return segments


_default_segmenter = ContentSegmenter()


def detect_segments(content: str, hint: Optional[str] = None) -> List[Segment]:
    """Segment ``content`` with the default size cap."""
    return _default_segmenter.segment(content, hint)
