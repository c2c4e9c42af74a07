"""Common Log Format parser — compiled regex match, then per-field conversion.

Parsing runs in two stages:
  1. match_line():    the whole line must fit the grammar, else INVALID_FORMAT
  2. convert_match(): timestamp → status → size, first failure wins

Example line:
  127.0.0.1 - - [01/Jan/2024:12:00:00 +0000] "GET /api HTTP/1.1" 200 1234
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

LOG_PATTERN = re.compile(
    r'(?P<ip>[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}) - - '
    r'\[(?P<timestamp>[^\]]+)\] '
    r'"(?P<method>\S+) (?P<path>/.+) (?P<protocol>\S+)" '
    r'(?P<status>[0-9]{3}) '
    r'(?P<size>.+)'
)

_DIGITS_RE = re.compile(r"\+?[0-9]+")

# numeric offset only; strptime %z would also take "Z"
_OFFSET_RE = re.compile(r".* [+-][0-9]{2}:?[0-9]{2}")

TIMESTAMP_FORMAT = "%d/%b/%Y:%H:%M:%S %z"

MAX_STATUS = 2**16 - 1
MAX_SIZE = 2**64 - 1


class ParseError(Enum):
    """Why a line could not be turned into a LogEntry."""

    INVALID_FORMAT = "Invalid log format"
    INVALID_TIMESTAMP = "Invalid timestamp"
    INVALID_STATUS = "Invalid status code"
    INVALID_SIZE = "Invalid size"

    def __str__(self) -> str:
        return self.value


class LogParseError(ValueError):
    """Raised by the parsing functions; ``kind`` says which check failed."""

    def __init__(self, kind: ParseError):
        super().__init__(kind.value)
        self.kind = kind


@dataclass(frozen=True)
class LogEntry:
    ip: str
    timestamp: datetime
    method: str
    path: str
    status: int
    size: int


@dataclass(frozen=True)
class LogMatch:
    """Raw text tokens captured by LOG_PATTERN, not yet validated."""

    ip: str
    timestamp: str
    method: str
    path: str
    status: str
    size: str


# ---------------------------------------------------------------------------
# Field conversion helpers
# ---------------------------------------------------------------------------


def _parse_timestamp(text: str) -> datetime:
    """Convert '15/Jan/2024:10:23:45 +0100' → aware datetime in UTC."""
    if not _OFFSET_RE.fullmatch(text):
        raise LogParseError(ParseError.INVALID_TIMESTAMP)
    try:
        dt = datetime.strptime(text, TIMESTAMP_FORMAT)
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # OverflowError: the UTC instant falls outside years 1-9999
        raise LogParseError(ParseError.INVALID_TIMESTAMP) from None


def _parse_unsigned(text: str, maximum: int, kind: ParseError) -> int:
    """ASCII digits with an optional leading "+"; no "-", whitespace or underscores."""
    if not _DIGITS_RE.fullmatch(text):
        raise LogParseError(kind)
    value = int(text)
    if value > maximum:
        raise LogParseError(kind)
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def match_line(line: str) -> LogMatch:
    """Check the overall shape of *line* and capture its tokens.

    Raises LogParseError(INVALID_FORMAT) if the full line does not match.
    """
    m = LOG_PATTERN.fullmatch(line)
    if not m:
        raise LogParseError(ParseError.INVALID_FORMAT)
    return LogMatch(
        ip=m.group("ip"),
        timestamp=m.group("timestamp"),
        method=m.group("method"),
        path=m.group("path"),
        status=m.group("status"),
        size=m.group("size"),
    )


def convert_match(match: LogMatch) -> LogEntry:
    """Validate and convert captured tokens, in timestamp/status/size order."""
    timestamp = _parse_timestamp(match.timestamp)
    status = _parse_unsigned(match.status, MAX_STATUS, ParseError.INVALID_STATUS)
    size = _parse_unsigned(match.size, MAX_SIZE, ParseError.INVALID_SIZE)
    return LogEntry(
        ip=match.ip,
        timestamp=timestamp,
        method=match.method,
        path=match.path,
        status=status,
        size=size,
    )


def parse_common_log(line: str) -> LogEntry:
    """Parse one Common Log Format line. Raises LogParseError on bad input."""
    return convert_match(match_line(line))


def parse(line: str) -> LogEntry | ParseError:
    """Like parse_common_log(), but returns the ParseError instead of raising."""
    try:
        return parse_common_log(line)
    except LogParseError as e:
        return e.kind
