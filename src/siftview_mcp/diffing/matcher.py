"""Line-level edit script computation.

The script is a longest common subsequence of the two line sequences. It is
exposed as difflib matching blocks so that opcodes and hunk grouping come
from :class:`difflib.SequenceMatcher`.

Tie-breaking between equally long alignments:

* a common prefix and suffix are always matched;
* equal lines are matched as early as possible;
* when skipping either line keeps the same LCS length, the lexicographically
  greater line is skipped. The rule depends only on line content, so swapping
  the inputs mirrors the alignment.

Changed regions larger than ``DP_CELL_LIMIT`` cells are matched by difflib's
longest-block recursion with its popular-line heuristic. Memory stays linear
and time stays bounded, but the result is not guaranteed to be a longest
common subsequence and ties resolve by position.
"""

import difflib
import logging
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)

DP_CELL_LIMIT = 250_000

Pair = Tuple[int, int]


def _lcs_pairs(a: Sequence[str], b: Sequence[str]) -> List[Pair]:
    """Matched index pairs from a full LCS table."""
    n, m = len(a), len(b)
    lengths = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row, below = lengths[i], lengths[i + 1]
        line = a[i]
        for j in range(m - 1, -1, -1):
            if line == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = below[j] if below[j] >= row[j + 1] else row[j + 1]

    pairs: List[Pair] = []
    i = j = 0
    while i < n and j < m:
        if a[i] == b[j]:
            pairs.append((i, j))
            i += 1
            j += 1
            continue
        skip_left = lengths[i + 1][j]
        skip_right = lengths[i][j + 1]
        if skip_left > skip_right or (skip_left == skip_right and a[i] > b[j]):
            i += 1
        else:
            j += 1
    return pairs


def _block_pairs(a: Sequence[str], b: Sequence[str]) -> List[Pair]:
    """Matched index pairs from difflib's longest matching blocks."""
    matcher = difflib.SequenceMatcher(None, a, b, autojunk=True)
    return [
        (block.a + k, block.b + k)
        for block in matcher.get_matching_blocks()
        for k in range(block.size)
    ]


def matching_pairs(a: Sequence[str], b: Sequence[str]) -> List[Pair]:
    """All matched (left, right) line index pairs in ascending order."""
    n, m = len(a), len(b)
    prefix = 0
    while prefix < n and prefix < m and a[prefix] == b[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < n - prefix
        and suffix < m - prefix
        and a[n - 1 - suffix] == b[m - 1 - suffix]
    ):
        suffix += 1

    middle_a = a[prefix : n - suffix]
    middle_b = b[prefix : m - suffix]
    if not middle_a or not middle_b:
        middle: List[Pair] = []
    elif len(middle_a) * len(middle_b) <= DP_CELL_LIMIT:
        middle = _lcs_pairs(middle_a, middle_b)
    else:
        logger.debug(
            f"Changed region {len(middle_a)}x{len(middle_b)} exceeds DP limit; "
            "matching longest blocks"
        )
        middle = _block_pairs(middle_a, middle_b)

    pairs = [(i, i) for i in range(prefix)]
    pairs.extend((i + prefix, j + prefix) for i, j in middle)
    pairs.extend((n - suffix + s, m - suffix + s) for s in range(suffix))
    return pairs


def matching_blocks(a: Sequence[str], b: Sequence[str]) -> List[difflib.Match]:
    """Coalesce matched pairs into difflib blocks, ending with the sentinel."""
    blocks: List[difflib.Match] = []
    start_i = start_j = size = 0
    for i, j in matching_pairs(a, b):
        if size and i == start_i + size and j == start_j + size:
            size += 1
            continue
        if size:
            blocks.append(difflib.Match(start_i, start_j, size))
        start_i, start_j, size = i, j, 1
    if size:
        blocks.append(difflib.Match(start_i, start_j, size))
    blocks.append(difflib.Match(len(a), len(b), 0))
    return blocks


class LineMatcher(difflib.SequenceMatcher):
    """SequenceMatcher whose matching blocks come from :func:`matching_blocks`."""

    def __init__(self, a: Sequence[str] = (), b: Sequence[str] = ()):
        super().__init__(None, a, b, autojunk=False)

    def get_matching_blocks(self) -> List[difflib.Match]:
        if self.matching_blocks is None:
            self.matching_blocks = matching_blocks(self.a, self.b)
        return self.matching_blocks
