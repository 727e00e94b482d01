"""Newline-delimited JSON (NDJSON / JSONL) parsing helpers."""

from __future__ import annotations

import json
from typing import Any, AsyncIterator, Iterable, Iterator

from .exceptions import InheritageDecodeError


def _decode_line(line: str, line_number: int) -> Any:
    try:
        return json.loads(line)
    except ValueError as exc:
        raise InheritageDecodeError(
            f"Failed to parse NDJSON record on line {line_number}: {exc}",
            line_number=line_number,
            line=line,
        ) from exc


def parse_ndjson_lines(lines: Iterable[str]) -> Iterator[Any]:
    """Parse a stream of NDJSON lines into records.

    Blank lines are skipped. The first malformed line raises
    InheritageDecodeError; no record after it is produced.
    """
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue
        yield _decode_line(line, line_number)


async def parse_ndjson_lines_async(lines: AsyncIterator[str]) -> AsyncIterator[Any]:
    """Parse an async stream of NDJSON lines into records."""
    line_number = 0
    async for raw_line in lines:
        line_number += 1
        line = raw_line.strip()
        if not line:
            continue
        yield _decode_line(line, line_number)


def parse_ndjson(text: str | None) -> list[Any]:
    """Parse a complete NDJSON document, failing as a whole on any bad line."""
    if not text:
        return []
    return list(parse_ndjson_lines(text.splitlines()))
