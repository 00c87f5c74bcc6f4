"""Data models for diff results."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union


@dataclass(frozen=True)
class UnchangedBlock:
    """A run of lines present on both sides."""

    lines: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def count(self) -> int:
        return len(self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "unchanged", "count": self.count, "lines": list(self.lines)}


@dataclass(frozen=True)
class ChangedBlock:
    """A run of deleted lines and the lines inserted in their place."""

    old_lines: Tuple[str, ...]
    new_lines: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "old_lines", tuple(self.old_lines))
        object.__setattr__(self, "new_lines", tuple(self.new_lines))
        if not self.old_lines and not self.new_lines:
            raise ValueError("ChangedBlock needs at least one old or new line")

    def swapped(self) -> "ChangedBlock":
        return ChangedBlock(self.new_lines, self.old_lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "changed",
            "old_lines": list(self.old_lines),
            "new_lines": list(self.new_lines),
        }


DiffBlock = Union[UnchangedBlock, ChangedBlock]


@dataclass(frozen=True)
class StructuredDiff:
    """Unchanged/changed blocks for side-by-side rendering."""

    left_label: str
    right_label: str
    blocks: Tuple[DiffBlock, ...]

    def __post_init__(self):
        object.__setattr__(self, "blocks", tuple(self.blocks))

    @property
    def is_identical(self) -> bool:
        return all(isinstance(block, UnchangedBlock) for block in self.blocks)

    @property
    def added_count(self) -> int:
        return sum(len(b.new_lines) for b in self.blocks if isinstance(b, ChangedBlock))

    @property
    def removed_count(self) -> int:
        return sum(len(b.old_lines) for b in self.blocks if isinstance(b, ChangedBlock))

    def swapped(self) -> "StructuredDiff":
        """The same diff seen from the other side."""
        return StructuredDiff(
            left_label=self.right_label,
            right_label=self.left_label,
            blocks=tuple(
                block.swapped() if isinstance(block, ChangedBlock) else block
                for block in self.blocks
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left_label": self.left_label,
            "right_label": self.right_label,
            "blocks": [block.to_dict() for block in self.blocks],
        }


@dataclass(frozen=True)
class DiffResult:
    """Both renderings of one edit script."""

    unified: str
    structured: StructuredDiff
