"""Line splitting and token counting over raw bytes."""

from collections.abc import Iterable, Iterator

# Bytes stripped from both ends of a line before splitting: every control
# byte and space (0x00-0x20), matching a classic string trim.
TRIM_BYTES = bytes(range(0x21))


def count_tokens(line: bytes) -> int:
    """
    Count whitespace-delimited tokens in one line.

    The line is first trimmed of bytes <= 0x20 at both ends, then split on
    runs of ASCII whitespace (space, tab, CR, LF, VT, FF). Other control
    bytes inside the line, and all non-ASCII bytes, are token bytes.
    """
    return len(line.strip(TRIM_BYTES).split())


def iter_lines(data: bytes) -> Iterator[bytes]:
    """Yield lines from data, splitting on \\n, \\r or \\r\\n."""
    yield from data.splitlines()


def max_tokens(lines: Iterable[bytes]) -> int:
    """Return the largest token count over lines, 0 when there are none."""
    longest = 0
    for line in lines:
        tokens = count_tokens(line)
        if tokens > longest:
            longest = tokens
    return longest


def max_tokens_per_line(data: bytes) -> int:
    """Return the largest token count of any line in data."""
    return max_tokens(iter_lines(data))
