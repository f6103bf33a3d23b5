from __future__ import annotations
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .formatter import DEFAULT_INDENT_UNIT, beautify, loads_strict
from .locator import ErrorInfo, locate
from .partial import AutomatonState, format_prefix, replay

log = logging.getLogger(__name__)

EXPECT_STRING_END = "terminating quote for string"
EXPECT_CLOSE_OR_VALUE = "closing brace/bracket or next value"
EXPECT_VALUE_OR_END = "value or end of input"

_WS = " \t\n\r"

# ------------------------------ Results ------------------------------
@dataclass
class ValidResult:
    parsed_value: Any
    formatted_full: str
    is_valid: bool = True

    display_line = 1
    display_column = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": True, "parsedValue": self.parsed_value, "formattedFull": self.formatted_full}

@dataclass
class InvalidResult:
    error: str
    error_info: ErrorInfo
    error_index: int
    formatted_prefix: str
    suffix: str
    formatted_error_offset: int
    formatted_content: str
    token_context: Optional[AutomatonState] = None
    expected: Optional[str] = None
    is_valid: bool = False

    @property
    def display_line(self) -> int:
        return self.formatted_prefix.count("\n") + 1

    @property
    def display_column(self) -> int:
        return len(self.formatted_prefix.rsplit("\n", 1)[-1]) + 1

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "isValid": False,
            "error": self.error,
            "errorInfo": asdict(self.error_info),
            "errorIndex": self.error_index,
            "formattedPrefix": self.formatted_prefix,
            "suffix": self.suffix,
            "formattedErrorOffset": self.formatted_error_offset,
            "formattedContent": self.formatted_content,
            "displayLine": self.display_line,
            "displayColumn": self.display_column,
        }
        if self.token_context is not None:
            tc = self.token_context
            out["tokenContext"] = {"depth": tc.depth, "inString": tc.in_string, "escapeNext": tc.escape_next}
            out["expected"] = self.expected
        return out

IncrementalResult = Union[ValidResult, InvalidResult]

# ------------------------------ Reference parser ------------------------------
def _reanchor(exc: json.JSONDecodeError) -> json.JSONDecodeError:
    doc, pos = exc.doc, exc.pos
    if exc.msg.startswith("Unterminated string"):
        # the string runs to end of input; fail where the input ran out
        return json.JSONDecodeError("Unterminated string", doc, len(doc))
    if exc.msg.startswith("Illegal trailing comma") and doc[pos:pos + 1] == ",":
        i = pos + 1
        while i < len(doc) and doc[i] in _WS: i += 1
        return json.JSONDecodeError(exc.msg, doc, i)
    return exc

def _reference_parse(source: str) -> Tuple[Any, Optional[str]]:
    try:
        return loads_strict(source), None
    except json.JSONDecodeError as exc:
        return None, str(_reanchor(exc))
    except (ValueError, RecursionError) as exc:
        return None, str(exc)

# ------------------------------ Validation ------------------------------
def _expected_for(state: AutomatonState) -> str:
    if state.in_string:
        return EXPECT_STRING_END
    if state.depth > 0:
        return EXPECT_CLOSE_OR_VALUE
    return EXPECT_VALUE_OR_END

def check(source: str) -> Optional[ErrorInfo]:
    """Reference parse plus locator only; None when `source` is valid JSON."""
    _, message = _reference_parse(source)
    if message is None:
        return None
    return locate(message, source)

def format_until_error(source: str, indent_unit: str = DEFAULT_INDENT_UNIT) -> IncrementalResult:
    """Pretty-print `source`, or format it up to the point the parser rejected it.

    Never raises: an invalid document comes back as an `InvalidResult` whose
    `formatted_prefix` is the re-indented text before the failure and whose
    `suffix` is the untouched remainder.
    """
    value, message = _reference_parse(source)
    if message is None:
        return ValidResult(value, beautify(value, indent_unit))

    info = locate(message, source)
    error_index = max(0, min(info.position, len(source)))
    log.debug("reference parser rejected input at char %d: %s", error_index, message)
    partial = format_prefix(source, error_index, indent_unit)
    suffix = source[error_index:]
    return InvalidResult(
        error=message,
        error_info=info,
        error_index=error_index,
        formatted_prefix=partial.formatted_prefix,
        suffix=suffix,
        formatted_error_offset=partial.formatted_error_offset,
        formatted_content=partial.formatted_prefix + suffix,
    )

def validate_incremental(source: str, indent_unit: str = DEFAULT_INDENT_UNIT) -> IncrementalResult:
    """`format_until_error` plus the automaton state at the failure and a hint
    about what the parser expected there."""
    result = format_until_error(source, indent_unit)
    if result.is_valid:
        return result
    result.token_context = replay(source, result.error_index)
    result.expected = _expected_for(result.token_context)
    return result

def error_notification(result: IncrementalResult) -> str:
    if result.is_valid:
        return "Valid JSON"
    return f"Invalid JSON: {result.error} (Line {result.display_line}, Column {result.display_column})"
