"""Data models for content detection and segmentation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ..errors import InvalidArgumentsError


class ContentKind(str, Enum):
    """Data formats the engine recognizes."""

    JSON = "json"
    CSV = "csv"
    XML = "xml"
    YAML = "yaml"
    PROPERTIES = "properties"
    TEXT = "text"

    @classmethod
    def parse(cls, value: "ContentKind | str") -> "ContentKind":
        """Resolve a kind from a member, its string value or a known alias."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        try:
            return cls(_KIND_ALIASES.get(name, name))
        except ValueError:
            raise InvalidArgumentsError(
                f"Unknown content kind: {value!r}",
                {"kind": value, "allowed": [k.value for k in cls]},
            ) from None


# Alternate names accepted at the boundary
_KIND_ALIASES = {
    "html": "xml",
    "htm": "xml",
    "yml": "yaml",
    "env": "properties",
}


class DetectionMethod(Enum):
    """Methods used for content detection."""

    EXTENSION = "extension"
    LEXER = "lexer"
    HEURISTIC = "heuristic"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class DetectionResult:
    """Result of content detection with confidence score."""

    kind: ContentKind
    confidence: float
    method: DetectionMethod = DetectionMethod.HEURISTIC

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "confidence": self.confidence,
            "method": self.method.value,
        }

    def __repr__(self) -> str:
        return (
            f"DetectionResult(kind='{self.kind.value}', confidence={self.confidence:.2f}, "
            f"method={self.method.value})"
        )


@dataclass(frozen=True)
class Segment:
    """A line-aligned region of a buffer tagged with one kind.

    Lines are 1-based and inclusive. A segment is only meaningful for the
    exact buffer text it was computed from.
    """

    start_line: int
    end_line: int
    kind: ContentKind

    def __post_init__(self):
        if not isinstance(self.start_line, int) or not isinstance(self.end_line, int):
            raise InvalidArgumentsError("Segment line numbers must be integers")
        if self.start_line < 1:
            raise InvalidArgumentsError(
                f"Segment start_line must be >= 1, got {self.start_line}",
                {"start_line": self.start_line},
            )
        if self.end_line < self.start_line:
            raise InvalidArgumentsError(
                f"Segment end_line {self.end_line} is before start_line {self.start_line}",
                {"start_line": self.start_line, "end_line": self.end_line},
            )
        object.__setattr__(self, "kind", ContentKind.parse(self.kind))

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def extended_to(self, end_line: int) -> "Segment":
        """Return a copy of this segment ending at ``end_line``."""
        return Segment(self.start_line, end_line, self.kind)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Segment":
        """Build a segment from snake_case or camelCase keys."""
        try:
            start = data["start_line"] if "start_line" in data else data["startLine"]
            end = data["end_line"] if "end_line" in data else data["endLine"]
            kind = data["kind"]
        except KeyError as e:
            raise InvalidArgumentsError(f"Segment is missing field {e.args[0]!r}") from None
        return cls(start_line=start, end_line=end, kind=kind)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "kind": self.kind.value,
        }
