from __future__ import annotations
import re
from dataclasses import dataclass

# Parsers phrase failures differently: some give line/column, some a char offset.
_LINE_COLUMN_RE = re.compile(r"line\s+(\d+)\s*,?\s*column\s+(\d+)", re.I)
_POSITION_RE = re.compile(r"position\s+(\d+)", re.I)

@dataclass
class ErrorInfo:
    line: int = 1
    column: int = 1
    position: int = 0
    message: str = ""

def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))

def _position_from_line_column(source: str, line: int, column: int) -> int:
    lines = source.split("\n")
    pos = 0
    for i in range(min(line - 1, len(lines))):
        pos += len(lines[i]) + 1
    return pos + max(0, column - 1)

def locate(message: str, source: str) -> ErrorInfo:
    """Map a parser failure message onto `source`.

    Never raises; an unrecognized message yields line 1, column 1, position 0.
    """
    message = message or ""
    source = source or ""

    m = _LINE_COLUMN_RE.search(message)
    if m:
        line, column = int(m.group(1)), int(m.group(2))
        pos = _position_from_line_column(source, line, column)
        return ErrorInfo(max(1, line), max(1, column), _clamp(pos, 0, len(source)), message)

    m = _POSITION_RE.search(message)
    if m:
        pos = _clamp(int(m.group(1)), 0, len(source))
        line = source.count("\n", 0, pos) + 1
        column = pos - source.rfind("\n", 0, pos)
        return ErrorInfo(line, column, pos, message)

    return ErrorInfo(message=message)
