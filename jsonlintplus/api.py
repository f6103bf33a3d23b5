from __future__ import annotations
from dataclasses import replace
from typing import Optional, Union

from .formatter import FormatConfig, format_json, indent_unit_for
from .validator import IncrementalResult, InvalidResult, error_notification, validate_incremental

DEFAULT_CFG = FormatConfig()

class InvalidJSONError(ValueError):
    """Raised by `format_text`; `result` holds the partial formatting up to the failure."""

    def __init__(self, result: InvalidResult):
        super().__init__(error_notification(result))
        self.result = result

def validate_text(text: str, *, indent: Union[int, str, None] = None) -> IncrementalResult:
    unit = indent_unit_for(indent if indent is not None else DEFAULT_CFG.indent)
    return validate_incremental(text, unit)

def format_text(
    text: str,
    *,
    indent: Union[int, str, None] = None,
    mode: Optional[str] = None,
    print_width: Optional[int] = None,
    sort_keys: Optional[bool] = None,
    remove_empty: Optional[bool] = None,
) -> str:
    """Format a JSON string; raises InvalidJSONError when it does not parse."""
    result = validate_text(text, indent=indent)
    if not result.is_valid:
        raise InvalidJSONError(result)

    overrides = dict(indent=indent, mode=mode, print_width=print_width,
                     sort_keys=sort_keys, remove_empty=remove_empty)
    cfg = replace(DEFAULT_CFG, **{k: v for k, v in overrides.items() if v is not None})
    return format_json(result.parsed_value, cfg)
