"""Generator-based file reading and glob expansion."""

import glob
import logging
import os
from typing import Generator

logger = logging.getLogger(__name__)


def read_lines(filepath: str, encoding: str = "utf-8") -> Generator[tuple[int, str], None, None]:
    """Yield (line_number, line) for each line in a single file.

    Line numbers start at 1. The trailing line terminator is removed.
    """
    logger.debug("Reading %s", filepath)
    with open(filepath, "r", encoding=encoding, newline="") as f:
        for number, line in enumerate(f, start=1):
            yield number, line.rstrip("\r\n")


def read_multiple(
    paths: list[str], encoding: str = "utf-8"
) -> Generator[tuple[str, int, str], None, None]:
    """Yield (path, line_number, line) from multiple files, sequentially."""
    for path in paths:
        for number, line in read_lines(path, encoding=encoding):
            yield path, number, line


def _resolve(raw: str) -> list[str]:
    """Files named by one argument: glob matches, or the literal path."""
    if any(c in raw for c in ("*", "?", "[")):
        return [m for m in sorted(glob.glob(raw)) if os.path.isfile(m)]
    if not os.path.isfile(raw):
        raise FileNotFoundError(f"File not found: {raw}")
    return [raw]


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Resolve every argument to files, first occurrence wins.

    Raises FileNotFoundError for a missing literal path, or if nothing matched.
    """
    resolved = (path for raw in raw_paths for path in _resolve(raw))
    expanded = list(dict.fromkeys(resolved))
    if not expanded:
        raise FileNotFoundError("No log files found matching the given paths")
    return expanded
