"""Content kind detection using extension hints, Pygments lexers and sniffing."""

import logging
from typing import Dict, Optional, Tuple

from pygments.lexers import find_lexer_class_for_filename
from pygments.util import ClassNotFound

from ..config import DEFAULT_MAX_BUFFER_BYTES
from ..utils.lines import byte_size
from .models import ContentKind, DetectionMethod, DetectionResult

logger = logging.getLogger(__name__)


def normalize_extension(hint: Optional[str]) -> str:
    """Reduce an extension, file name or path to a bare lowercase extension.

    ``"json"``, ``".JSON"``, ``"data.json"`` and ``"/tmp/data.json"`` all
    normalize to ``"json"``.
    """
    if not hint:
        return ""
    value = hint.strip().lower().replace("\\", "/").rsplit("/", 1)[-1]
    if "." in value:
        value = value.rsplit(".", 1)[1]
    return value


class ContentDetector:
    """Classifies a span of text into a ContentKind.

    Rules are checked in a fixed order and the first match wins:
    extension table, Pygments filename lookup, then content sniffing.
    Detection never raises; unknown content is plain text.
    """

    EXTENSION_MAP: Dict[str, Tuple[ContentKind, float]] = {
        "json": (ContentKind.JSON, 0.95),
        "csv": (ContentKind.CSV, 0.95),
        "yaml": (ContentKind.YAML, 0.95),
        "yml": (ContentKind.YAML, 0.95),
        "xml": (ContentKind.XML, 0.9),
        "html": (ContentKind.XML, 0.9),
        "htm": (ContentKind.XML, 0.9),
        "env": (ContentKind.PROPERTIES, 0.9),
        "properties": (ContentKind.PROPERTIES, 0.9),
    }

    # Pygments lexer aliases that correspond to a kind
    LEXER_ALIASES: Dict[str, ContentKind] = {
        "json": ContentKind.JSON,
        "json-object": ContentKind.JSON,
        "jsonld": ContentKind.JSON,
        "json-ld": ContentKind.JSON,
        "xml": ContentKind.XML,
        "html": ContentKind.XML,
        "xslt": ContentKind.XML,
        "yaml": ContentKind.YAML,
        "properties": ContentKind.PROPERTIES,
        "jproperties": ContentKind.PROPERTIES,
        "ini": ContentKind.PROPERTIES,
        "cfg": ContentKind.PROPERTIES,
        "dosini": ContentKind.PROPERTIES,
    }

    LEXER_CONFIDENCE = 0.9
    JSON_CONFIDENCE = 0.85
    XML_CONFIDENCE = 0.8
    YAML_DOCUMENT_CONFIDENCE = 0.75
    CSV_CONFIDENCE = 0.7
    YAML_MAPPING_CONFIDENCE = 0.65
    PROPERTIES_CONFIDENCE = 0.65
    FALLBACK_CONFIDENCE = 0.5

    def __init__(self, max_bytes: int = DEFAULT_MAX_BUFFER_BYTES):
        """
        Initialize the detector.

        Args:
            max_bytes: Size cap above which content sniffing is skipped
        """
        self.max_bytes = max_bytes

    def _detect_from_extension(self, extension: str) -> Optional[DetectionResult]:
        """Detect kind from the static extension table."""
        entry = self.EXTENSION_MAP.get(extension)
        if entry is None:
            return None
        kind, confidence = entry
        return DetectionResult(kind, confidence, DetectionMethod.EXTENSION)

    def _detect_from_lexer(self, extension: str) -> Optional[DetectionResult]:
        """Detect kind from the Pygments lexer registered for the extension."""
        try:
            lexer_class = find_lexer_class_for_filename(f"file.{extension}")
        except ClassNotFound:
            lexer_class = None
        if lexer_class is None:
            return None

        for alias in lexer_class.aliases:
            kind = self.LEXER_ALIASES.get(alias)
            if kind is not None:
                logger.debug(f"Extension '{extension}' resolved via lexer {lexer_class.name}")
                return DetectionResult(kind, self.LEXER_CONFIDENCE, DetectionMethod.LEXER)
        return None

    def detect_from_hint(self, hint: Optional[str]) -> Optional[DetectionResult]:
        """Resolve a declared extension hint, or None when it names no known kind."""
        extension = normalize_extension(hint)
        if not extension:
            return None
        return self._detect_from_extension(extension) or self._detect_from_lexer(extension)

    def _sniff_content(self, content: str) -> DetectionResult:
        """Classify trimmed content by its shape."""
        trimmed = content.strip()
        starts_structured = trimmed.startswith("{") or trimmed.startswith("[")

        if starts_structured and '"' in trimmed:
            return DetectionResult(ContentKind.JSON, self.JSON_CONFIDENCE)

        lines = trimmed.splitlines()
        if len(lines) > 1 and "," in lines[0]:
            if any("," in line for line in lines[1:] if line.strip()):
                return DetectionResult(ContentKind.CSV, self.CSV_CONFIDENCE)

        if trimmed.startswith("<") and trimmed.endswith(">"):
            return DetectionResult(ContentKind.XML, self.XML_CONFIDENCE)

        if trimmed.startswith("---"):
            return DetectionResult(ContentKind.YAML, self.YAML_DOCUMENT_CONFIDENCE)
        if len(lines) > 1 and not starts_structured:
            head = [
                line.strip()
                for line in lines[:3]
                if line.strip() and not line.strip().startswith("#")
            ]
            if any(": " in line for line in head):
                return DetectionResult(ContentKind.YAML, self.YAML_MAPPING_CONFIDENCE)

        if "=" in trimmed and not starts_structured:
            entries = [
                line.strip()
                for line in lines
                if line.strip() and not line.strip().startswith(("#", "!"))
            ]
            if entries and all("=" in line and not line.startswith("=") for line in entries):
                return DetectionResult(ContentKind.PROPERTIES, self.PROPERTIES_CONFIDENCE)

        return DetectionResult(
            ContentKind.TEXT, self.FALLBACK_CONFIDENCE, DetectionMethod.FALLBACK
        )

    def is_oversized(self, content: str) -> bool:
        return byte_size(content) > self.max_bytes

    def detect(self, content: str, hint: Optional[str] = None) -> DetectionResult:
        """
        Detect the kind of a span of text.

        Args:
            content: Text to classify
            hint: Optional extension, file name or path declared by the caller

        Returns:
            DetectionResult with kind, confidence and the rule that matched
        """
        hinted = self.detect_from_hint(hint)
        if hinted is not None:
            return hinted

        if self.is_oversized(content):
            logger.warning(
                f"Content exceeds {self.max_bytes} bytes; skipping content sniffing"
            )
            return DetectionResult(
                ContentKind.TEXT, self.FALLBACK_CONFIDENCE, DetectionMethod.FALLBACK
            )

        return self._sniff_content(content)


_default_detector = ContentDetector()


def detect_content(content: str, hint: Optional[str] = None) -> DetectionResult:
    """Detect the kind of ``content`` with the default size cap."""
    return _default_detector.detect(content, hint)
