from __future__ import annotations
import json, re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Union

DEFAULT_INDENT_UNIT = "  "

def indent_unit_for(indentation: Union[int, str, None]) -> str:
    """`"tab"` -> tab; an int or digit string -> that many spaces; else two spaces."""
    if indentation in ("tab", "\t"):
        return "\t"
    if isinstance(indentation, bool):
        return DEFAULT_INDENT_UNIT
    if isinstance(indentation, int):
        return " " * indentation if indentation > 0 else DEFAULT_INDENT_UNIT
    if isinstance(indentation, str) and indentation.strip().isdigit():
        n = int(indentation.strip())
        return " " * n if n > 0 else DEFAULT_INDENT_UNIT
    return DEFAULT_INDENT_UNIT

# ------------------------------ Config ------------------------------
MODES = ("beautify", "minify", "compact", "wrap")

@dataclass
class FormatConfig:
    indent: Union[int, str] = 2         # spaces, or "tab"
    mode: str = "beautify"              # beautify | minify | compact | wrap
    print_width: int = 120
    long_block_threshold: int = 20
    array_wrap: str = "collapse"        # collapse | expand
    object_wrap: str = "collapse"       # collapse | expand
    sort_keys: bool = False
    remove_empty: bool = False
    eol: str = "\n"

    @property
    def indent_unit(self) -> str:
        return indent_unit_for(self.indent)

# ------------------------------ Transforms ------------------------------
def beautify(value: Any, indent_unit: str = DEFAULT_INDENT_UNIT) -> str:
    return json.dumps(value, indent=indent_unit, ensure_ascii=False)

def minify(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

def _sorted_dict(d: Dict[str, Any], recurse) -> Dict[str, Any]:
    return {k: recurse(d[k]) for k in sorted(d)}

def sort_keys(value: Any, recursive: bool = True) -> Any:
    if isinstance(value, list):
        return [sort_keys(v, recursive) for v in value]
    if isinstance(value, dict):
        if recursive:
            return _sorted_dict(value, lambda v: sort_keys(v, True))
        return _sorted_dict(value, lambda v: v)
    return value

def _is_empty_container(v: Any, remove_empty_array: bool, remove_empty_object: bool) -> bool:
    if remove_empty_array and isinstance(v, list) and not v: return True
    if remove_empty_object and isinstance(v, dict) and not v: return True
    return False

def remove_empty(
    value: Any,
    remove_null: bool = True,
    remove_empty_string: bool = False,
    remove_empty_array: bool = False,
    remove_empty_object: bool = False,
) -> Any:
    opts = dict(remove_null=remove_null, remove_empty_string=remove_empty_string,
                remove_empty_array=remove_empty_array, remove_empty_object=remove_empty_object)
    if isinstance(value, list):
        # arrays keep nulls and empty strings; only empty containers are dropped
        cleaned = [remove_empty(v, **opts) for v in value]
        return [v for v in cleaned if not _is_empty_container(v, remove_empty_array, remove_empty_object)]
    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        for k, v in value.items():
            if remove_null and v is None: continue
            if remove_empty_string and v == "": continue
            v = remove_empty(v, **opts)
            if _is_empty_container(v, remove_empty_array, remove_empty_object): continue
            out[k] = v
        return out
    return value

# ------------------------------ Layout ------------------------------
def _is_prim(x: Any) -> bool:
    return isinstance(x, (str, int, float, bool)) or x is None

def _dump_oneline(val: Any) -> str:
    return json.dumps(val, ensure_ascii=False, separators=(",", ": "))

def _fits_width(s: str, cfg: FormatConfig, level: int) -> bool:
    return len(s) + level * len(cfg.indent_unit) <= cfg.print_width

def _line_count(s: str) -> int:
    return s.count("\n") + 1

def _inline_list(lst: List[Any], cfg: FormatConfig, level: int) -> Optional[str]:
    parts: List[str] = []
    for el in lst:
        s = _format_value(el, cfg, level + 1)
        if "\n" in s: return None
        parts.append(s)
    one = "[" + ", ".join(parts) + "]"
    return one if _fits_width(one, cfg, level) else None

def _inline_object(d: Dict[str, Any], cfg: FormatConfig, level: int) -> Optional[str]:
    chunks: List[str] = []
    for k, v in d.items():
        s = _format_value(v, cfg, level + 1)
        if "\n" in s: return None
        chunks.append(f"{json.dumps(k, ensure_ascii=False)}: {s}")
    one = "{ " + ", ".join(chunks) + " }"
    if _fits_width(one, cfg, level) and _line_count(one) <= cfg.long_block_threshold:
        return one
    return None

def _format_value(val: Any, cfg: FormatConfig, level: int) -> str:
    indent = cfg.indent_unit * level
    child  = cfg.indent_unit * (level + 1)

    if _is_prim(val):
        return _dump_oneline(val)

    if isinstance(val, list):
        if not val: return "[]"
        if cfg.array_wrap == "collapse":
            one = _inline_list(val, cfg, level)
            if one is not None:
                return one
        parts = [child + _format_value(el, cfg, level + 1) for el in val]
        return "[\n" + ",\n".join(parts) + "\n" + indent + "]"

    if isinstance(val, dict):
        if not val: return "{}"
        if cfg.object_wrap == "collapse":
            one = _inline_object(val, cfg, level)
            if one is not None:
                return one
        lines = [f"{child}{json.dumps(k, ensure_ascii=False)}: {_format_value(v, cfg, level + 1)}"
                 for k, v in val.items()]
        return "{\n" + ",\n".join(lines) + "\n" + indent + "}"

    # Fallback
    return _dump_oneline(val)

def _layout(data: Any, cfg: FormatConfig) -> str:
    if cfg.mode == "minify":
        return minify(data)
    if cfg.mode == "compact":
        return _format_value(data, replace(cfg, object_wrap="expand"), 0)
    if cfg.mode == "wrap":
        return _format_value(data, cfg, 0)
    return beautify(data, cfg.indent_unit)

def format_json(data: Any, cfg: FormatConfig) -> str:
    if cfg.remove_empty:
        data = remove_empty(data)
    if cfg.sort_keys:
        data = sort_keys(data)
    return _layout(data, cfg) + cfg.eol

# ------------------------------ Strict parsing ------------------------------
_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?")
_WS = " \t\n\r"

class _Rejected(Exception):
    def __init__(self, token: str, msg: str):
        super().__init__(msg)
        self.token = token
        self.msg = msg

def _reject_constant(name: str):
    raise _Rejected(name, "Expecting value")

def _checked_int(s: str) -> int:
    try:
        return int(s)
    except ValueError as ex:  # int max str digits
        raise _Rejected(s, str(ex)) from None

def _value_offset(doc: str, token: str) -> int:
    """Offset of the first value outside strings spelled exactly `token`."""
    in_string = escape = False
    prev = ""
    for i, ch in enumerate(doc):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch in _WS:
            continue
        if prev in ("", "[", "{", ",", ":") and doc.startswith(token, i):
            m = _NUMBER_RE.match(doc, i)
            if m is None or m.end() == i + len(token):
                return i
        if ch == '"':
            in_string = True
        prev = ch
    return 0

def loads_strict(text: str) -> Any:
    """`json.loads` that rejects NaN/Infinity and integers past the interpreter's
    digit limit with a `JSONDecodeError` at the offending value."""
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_int=_checked_int)
    except _Rejected as ex:
        raise json.JSONDecodeError(ex.msg, text, _value_offset(text, ex.token)) from None

# ------------------------------ Reports ------------------------------
def _utf8_size(s: str) -> int:
    return len(s.encode("utf-8"))

@dataclass
class FormatReport:
    is_valid: bool
    formatted: Optional[str] = None
    original_size: int = 0
    formatted_size: int = 0
    compression_ratio: float = 0.0
    error: Optional[str] = None

@dataclass
class FormattingStats:
    original_size: int
    formatted_size: int
    original_lines: int
    formatted_lines: int
    size_change: int
    size_change_percent: float

def validate_and_format(text: str, cfg: FormatConfig) -> FormatReport:
    try:
        data = loads_strict(text)
    except (ValueError, RecursionError) as ex:
        return FormatReport(is_valid=False, error=str(ex))
    formatted = format_json(data, cfg)
    ratio = (1 - len(formatted) / len(text)) * 100 if text else 0.0
    return FormatReport(True, formatted, _utf8_size(text), _utf8_size(formatted), ratio)

def formatting_stats(original: str, formatted: str) -> FormattingStats:
    change = len(formatted) - len(original)
    return FormattingStats(
        original_size=_utf8_size(original),
        formatted_size=_utf8_size(formatted),
        original_lines=original.count("\n") + 1,
        formatted_lines=formatted.count("\n") + 1,
        size_change=change,
        size_change_percent=(change / len(original)) * 100 if original else 0.0,
    )
