"""Tests for the LCS line matcher."""

import difflib
import time

import pytest

from siftview_mcp.diffing import (
    ChangedBlock,
    LineMatcher,
    compute_diff_structured,
    matching_blocks,
)
from siftview_mcp.diffing import matcher as matcher_module


def lcs_length(a, b):
    return sum(block.size for block in matching_blocks(a, b))


class TestMatchingBlocks:
    """Test the matched line blocks."""

    def test_identical(self):
        blocks = matching_blocks(["a", "b"], ["a", "b"])
        assert blocks == [difflib.Match(0, 0, 2), difflib.Match(2, 2, 0)]

    def test_disjoint(self):
        assert matching_blocks(["a"], ["b"]) == [difflib.Match(1, 1, 0)]

    def test_empty_sides(self):
        assert matching_blocks([], ["x"]) == [difflib.Match(0, 1, 0)]
        assert matching_blocks(["x"], []) == [difflib.Match(1, 0, 0)]

    def test_prefix_and_suffix_are_matched(self):
        blocks = matching_blocks(["a", "b", "c"], ["a", "x", "c"])
        assert blocks == [
            difflib.Match(0, 0, 1),
            difflib.Match(2, 2, 1),
            difflib.Match(3, 3, 0),
        ]

    def test_longest_common_subsequence(self):
        assert lcs_length(list("abcabba"), list("cbabac")) == 4

    def test_duplicate_lines(self):
        """Repeated lines do not confuse the alignment."""
        a = ["}", "x", "}", "}"]
        b = ["}", "}", "y", "}"]
        assert lcs_length(a, b) == 3


class TestTieBreaking:
    """Equal-length alignments resolve by line content."""

    def test_swapped_pair_is_mirrored(self):
        forward = matching_blocks(["A", "B"], ["B", "A"])
        backward = matching_blocks(["B", "A"], ["A", "B"])
        mirrored = [difflib.Match(m.b, m.a, m.size) for m in backward]
        assert forward == mirrored

    @pytest.mark.parametrize(
        "a,b",
        [
            (["A", "B"], ["B", "A"]),
            (["x", "y", "z"], ["z", "y", "x"]),
            (["1", "2", "3", "4"], ["2", "1", "4", "3"]),
            (["k", "a", "k"], ["a", "k", "a"]),
        ],
    )
    def test_symmetric_under_swap(self, a, b):
        forward = matching_blocks(a, b)
        backward = matching_blocks(b, a)
        assert forward == [difflib.Match(m.b, m.a, m.size) for m in backward]


class TestLargeRegions:
    """Regions above the table limit are matched by longest blocks."""

    @pytest.mark.parametrize(
        "a,b",
        [
            (list("abcabba"), list("cbabac")),
            (["x", "y", "z"], ["z", "y", "x"]),
            (["a"] * 5, ["a"] * 3),
            ([], ["q", "r"]),
            (list("kitten"), list("sitting")),
        ],
    )
    def test_pairs_are_real_matches(self, monkeypatch, a, b):
        monkeypatch.setattr(matcher_module, "DP_CELL_LIMIT", 0)
        blocks = matching_blocks(a, b)
        for block in blocks[:-1]:
            assert a[block.a : block.a + block.size] == b[block.b : block.b + block.size]
        assert blocks[-1] == difflib.Match(len(a), len(b), 0)

    def test_blocks_ascend(self, monkeypatch):
        monkeypatch.setattr(matcher_module, "DP_CELL_LIMIT", 0)
        blocks = matching_blocks(list("abcabbaxyzabc"), list("cbabacxyzcab"))
        for first, second in zip(blocks, blocks[1:]):
            assert first.a + first.size <= second.a
            assert first.b + first.size <= second.b

    def test_common_run_is_found(self, monkeypatch):
        monkeypatch.setattr(matcher_module, "DP_CELL_LIMIT", 0)
        a = ["old"] + [f"row {n}" for n in range(10)] + ["tail a"]
        b = ["new", "extra"] + [f"row {n}" for n in range(10)] + ["tail b"]
        assert lcs_length(a, b) == 10

    def test_unrelated_buffers_finish_quickly(self):
        left = "\n".join(f"left line {n}" for n in range(5000))
        right = "\n".join(f"right line {n}" for n in range(5000))

        started = time.perf_counter()
        diff = compute_diff_structured(left, right)
        elapsed = time.perf_counter() - started

        assert elapsed < 2.0
        assert len(diff.blocks) == 1
        block = diff.blocks[0]
        assert isinstance(block, ChangedBlock)
        assert len(block.old_lines) == 5000
        assert len(block.new_lines) == 5000

    def test_repetitive_buffers_finish_quickly(self):
        left = "\n".join("}" if n % 2 else f"left {n}" for n in range(6000))
        right = "\n".join("}" if n % 3 else f"right {n}" for n in range(6000))

        started = time.perf_counter()
        diff = compute_diff_structured(left, right)
        elapsed = time.perf_counter() - started

        assert elapsed < 2.0
        assert diff.removed_count + diff.added_count > 0


class TestLineMatcher:
    """Test the SequenceMatcher integration."""

    def test_opcodes(self):
        matcher = LineMatcher(["a", "b", "c"], ["a", "x", "c"])
        assert matcher.get_opcodes() == [
            ("equal", 0, 1, 0, 1),
            ("replace", 1, 2, 1, 2),
            ("equal", 2, 3, 2, 3),
        ]

    def test_no_junk_heuristic(self):
        """Frequent lines such as blank lines still match."""
        a = [""] * 300 + ["end"]
        b = [""] * 300 + ["END"]
        matcher = LineMatcher(a, b)
        assert sum(block.size for block in matcher.get_matching_blocks()) == 300

    def test_ratio_uses_line_matches(self):
        assert LineMatcher(["a", "b"], ["a", "c"]).ratio() == pytest.approx(0.5)
