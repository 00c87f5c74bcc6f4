"""Shared helpers for siftview-mcp."""

from .lines import byte_size, count_lines, is_blank, line_separator, split_lines

__all__ = ["byte_size", "count_lines", "is_blank", "line_separator", "split_lines"]
