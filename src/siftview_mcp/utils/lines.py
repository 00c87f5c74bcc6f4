"""Line model shared by detection, formatting and diffing.

A buffer is split on ``\\r\\n`` or ``\\n``. An empty buffer is a single empty
line and a trailing separator produces a trailing empty line, so
``len(split_lines(text))`` is always the number of lines an editor shows.
"""

import re

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(content: str) -> list[str]:
    """Split content into lines without separators."""
    return _LINE_BREAK.split(content)


def line_separator(content: str) -> str:
    """Return the separator used by the buffer."""
    return "\r\n" if "\r\n" in content else "\n"


def count_lines(content: str) -> int:
    """Number of lines in the buffer (at least one)."""
    return content.count("\n") + 1


def byte_size(content: str) -> int:
    """UTF-8 size of the buffer."""
    return len(content.encode("utf-8", errors="surrogatepass"))


def is_blank(line: str) -> bool:
    return not line.strip()
