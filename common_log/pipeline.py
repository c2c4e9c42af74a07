"""Per-line orchestration — parse each line independently, abort or skip on errors."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from common_log.parser import LogEntry, ParseError, parse

logger = logging.getLogger(__name__)


class ErrorPolicy(Enum):
    ABORT = "abort"  # stop at the first unparsable line
    SKIP = "skip"    # log it and carry on


@dataclass(frozen=True)
class ParsedLine:
    source: str
    line_number: int
    line: str
    result: LogEntry | ParseError

    @property
    def ok(self) -> bool:
        return isinstance(self.result, LogEntry)


class LineParseFailure(Exception):
    """Raised in ABORT mode for the first line that fails to parse."""

    def __init__(self, source: str, line_number: int, kind: ParseError):
        super().__init__(f"{source}:{line_number}: {kind.value}")
        self.source = source
        self.line_number = line_number
        self.kind = kind


def parse_lines(
    lines: Iterable[tuple[str, int, str]],
    policy: ErrorPolicy = ErrorPolicy.ABORT,
    skip_blank: bool = True,
    include_errors: bool = False,
) -> Iterator[ParsedLine]:
    """Parse (source, line_number, line) triples lazily.

    Successful lines are always yielded. Failed lines raise LineParseFailure
    under ABORT; under SKIP they are logged and yielded only if
    include_errors is set.
    """
    for source, number, line in lines:
        if skip_blank and not line.strip():
            continue

        result = parse(line)
        parsed = ParsedLine(source=source, line_number=number, line=line, result=result)

        if parsed.ok:
            yield parsed
            continue

        if policy is ErrorPolicy.ABORT:
            raise LineParseFailure(source, number, result)

        logger.warning("Skipping %s:%d: %s", source, number, result.value)
        if include_errors:
            yield parsed
