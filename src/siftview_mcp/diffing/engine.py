"""Line diff between two buffers, rendered as unified text and as blocks."""

import logging
from typing import List, Optional, Sequence

from ..config import DEFAULT_LEFT_LABEL, DEFAULT_MAX_BUFFER_BYTES, DEFAULT_RIGHT_LABEL
from ..errors import ContentTooLargeError
from ..utils.lines import byte_size, split_lines
from .matcher import LineMatcher
from .models import ChangedBlock, DiffBlock, DiffResult, StructuredDiff, UnchangedBlock

logger = logging.getLogger(__name__)


def _format_range(start: int, stop: int) -> str:
    """Hunk range as ``start[,length]`` with 1-based start."""
    beginning = start + 1
    length = stop - start
    if length == 1:
        return f"{beginning}"
    if not length:
        beginning -= 1
    return f"{beginning},{length}"


def relabel_unified_diff(text: str, left_label: str, right_label: str) -> str:
    """Replace the source names in a unified diff header.

    Only the ``---``/``+++`` header lines change; hunk bodies are kept
    byte-for-byte. Text without that header is returned unchanged.
    """
    parts = text.split("\n", 2)
    if len(parts) < 2 or not parts[0].startswith("--- ") or not parts[1].startswith("+++ "):
        return text
    header = [f"--- {left_label}", f"+++ {right_label}"]
    return "\n".join(header + parts[2:])


class DiffEngine:
    """Computes one edit script per comparison and renders it twice."""

    def __init__(
        self,
        left_label: str = DEFAULT_LEFT_LABEL,
        right_label: str = DEFAULT_RIGHT_LABEL,
        context_lines: int = 3,
        max_bytes: int = DEFAULT_MAX_BUFFER_BYTES,
    ):
        """
        Initialize the diff engine.

        Args:
            left_label: Default name shown for the left buffer
            right_label: Default name shown for the right buffer
            context_lines: Unchanged lines shown around each change in hunks
            max_bytes: Size cap for either buffer
        """
        self.left_label = left_label
        self.right_label = right_label
        self.context_lines = context_lines
        self.max_bytes = max_bytes

    def _check_size(self, content: str, side: str) -> None:
        size = byte_size(content)
        if size > self.max_bytes:
            logger.warning(f"{side} buffer is {size} bytes, above the {self.max_bytes} byte cap")
            raise ContentTooLargeError(size, self.max_bytes, label=f"{side} buffer")

    def _structured(
        self,
        a: Sequence[str],
        b: Sequence[str],
        matcher: LineMatcher,
        left_label: str,
        right_label: str,
    ) -> StructuredDiff:
        blocks: List[DiffBlock] = []
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                blocks.append(UnchangedBlock(a[i1:i2]))
            else:
                blocks.append(ChangedBlock(a[i1:i2], b[j1:j2]))
        return StructuredDiff(left_label, right_label, blocks)

    def _unified(
        self,
        a: Sequence[str],
        b: Sequence[str],
        matcher: LineMatcher,
        left_label: str,
        right_label: str,
    ) -> str:
        lines = [f"--- {left_label}", f"+++ {right_label}"]
        for group in matcher.get_grouped_opcodes(self.context_lines):
            first, last = group[0], group[-1]
            lines.append(
                f"@@ -{_format_range(first[1], last[2])} "
                f"+{_format_range(first[3], last[4])} @@"
            )
            for tag, i1, i2, j1, j2 in group:
                if tag == "equal":
                    lines.extend(f" {line}" for line in a[i1:i2])
                    continue
                if tag in ("replace", "delete"):
                    lines.extend(f"-{line}" for line in a[i1:i2])
                if tag in ("replace", "insert"):
                    lines.extend(f"+{line}" for line in b[j1:j2])
        return "\n".join(lines) + "\n"

    def diff(
        self,
        left: str,
        right: str,
        left_label: Optional[str] = None,
        right_label: Optional[str] = None,
    ) -> DiffResult:
        """
        Compare two buffers.

        Args:
            left: Original buffer
            right: Buffer to compare against
            left_label: Name for the left side (default: engine label)
            right_label: Name for the right side (default: engine label)

        Returns:
            DiffResult holding the unified text and the structured blocks

        Raises:
            ContentTooLargeError: If either buffer exceeds the size cap
        """
        self._check_size(left, "left")
        self._check_size(right, "right")
        left_label = self.left_label if left_label is None else left_label
        right_label = self.right_label if right_label is None else right_label

        a = split_lines(left)
        b = split_lines(right)
        matcher = LineMatcher(a, b)

        structured = self._structured(a, b, matcher, left_label, right_label)
        unified = self._unified(a, b, matcher, left_label, right_label)
        logger.debug(
            f"Diffed {len(a)} vs {len(b)} lines: "
            f"-{structured.removed_count} +{structured.added_count}"
        )
        return DiffResult(unified=unified, structured=structured)


_default_engine = DiffEngine()


def compute_diff(
    left: str,
    right: str,
    left_label: str = DEFAULT_LEFT_LABEL,
    right_label: str = DEFAULT_RIGHT_LABEL,
) -> str:
    """Unified diff text between two buffers."""
    return _default_engine.diff(left, right, left_label, right_label).unified


def compute_diff_structured(
    left: str,
    right: str,
    left_label: str = DEFAULT_LEFT_LABEL,
    right_label: str = DEFAULT_RIGHT_LABEL,
) -> StructuredDiff:
    """Unchanged/changed blocks between two buffers."""
    return _default_engine.diff(left, right, left_label, right_label).structured
