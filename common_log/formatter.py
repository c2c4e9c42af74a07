"""Output formatters — text and JSON (NDJSON)."""

import json
from typing import Callable

from common_log.parser import LogEntry
from common_log.pipeline import ParsedLine


def format_text(entry: LogEntry) -> str:
    """One space-separated line, timestamp in ISO 8601 (UTC)."""
    return (
        f"{entry.ip} {entry.timestamp.isoformat()} "
        f"{entry.method} {entry.path} {entry.status} {entry.size}"
    )


def format_json(entry: LogEntry) -> str:
    """Return NDJSON — one JSON object per line, compatible with jq."""
    return json.dumps({
        "ip": entry.ip,
        "timestamp": entry.timestamp.isoformat(),
        "method": entry.method,
        "path": entry.path,
        "status": entry.status,
        "size": entry.size,
    })


def format_error(parsed: ParsedLine) -> str:
    """'<source>:<line>: <reason>' for a line that failed to parse."""
    return f"{parsed.source}:{parsed.line_number}: {parsed.result.value}"


def get_formatter(output_format: str = "text") -> Callable[[LogEntry], str]:
    """Factory that returns the right formatter for the output format name."""
    if output_format == "json":
        return format_json
    if output_format == "text":
        return format_text
    raise ValueError(f"Unknown output format: {output_format!r}")
