from __future__ import annotations
import re
from typing import List, Tuple

from rich.text import Text

from .validator import IncrementalResult

# ------------- Palette -------------
TOKENS = {
    "key":   "bold #a78bfa",
    "str":   "#f0abfc",
    "num":   "#bae6fd",
    "bool":  "#c4b5fd",
    "null":  "#c4b5fd",
    "brace": "#e5e7eb",
    "colon": "#e5e7eb",
}
GUTTER_STYLE = "dim cyan"
ERR_LINE_STYLE = "on #2f2969"
POINTER_STYLE = "bold red"

STR_RE  = re.compile(r'"(?:\\.|[^"\\])*"')
COLON_AFTER_RE = re.compile(r"\s*:")
NUM_RE  = re.compile(r"(?<![A-Za-z0-9_])-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
BOOL_RE = re.compile(r"(?<![A-Za-z0-9_])(?:true|false)(?![A-Za-z0-9_])")
NULL_RE = re.compile(r"(?<![A-Za-z0-9_])null(?![A-Za-z0-9_])")
PUNCT_RE = re.compile(r"[{}\[\]:]")

Span = Tuple[str, int, int]

def _tokenize(s: str) -> List[Span]:
    spans: List[Span] = []
    # strings cover punctuation and digits inside them
    inside = bytearray(len(s))
    for m in STR_RE.finditer(s):
        inside[m.start():m.end()] = b"\x01" * (m.end() - m.start())
        tag = "key" if COLON_AFTER_RE.match(s, m.end()) else "str"
        spans.append((tag, m.start(), m.end()))

    def free(a: int) -> bool:
        return not inside[a]

    for tag, rx in (("num", NUM_RE), ("bool", BOOL_RE), ("null", NULL_RE)):
        spans.extend((tag, m.start(), m.end()) for m in rx.finditer(s) if free(m.start()))
    for m in PUNCT_RE.finditer(s):
        if free(m.start()):
            spans.append(("brace" if m.group(0) != ":" else "colon", m.start(), m.end()))
    spans.sort(key=lambda t: (t[1], t[2]))
    return spans

def highlight_json(text: str) -> Text:
    out = Text(text)
    for tag, a, b in _tokenize(text):
        out.stylize(TOKENS[tag], a, b)
    return out

def _gutter(n: int, width: int) -> str:
    return f"{n:>{width}} " if n else " " * (width + 1)

def render_result(result: IncrementalResult, gutter: bool = True) -> Text:
    """Highlighted formatted text; for invalid input the raw suffix follows the
    highlighted prefix and a `^` line marks the failure."""
    if result.is_valid:
        content, spans = result.formatted_full, _tokenize(result.formatted_full)
        err_line = err_col = 0
    else:
        content, spans = result.formatted_content, _tokenize(result.formatted_prefix)
        err_line, err_col = result.display_line, result.display_column

    lines = content.split("\n")
    width = len(str(len(lines)))
    out = Text()
    start = 0
    for lineno, raw in enumerate(lines, 1):
        end = start + len(raw)
        line = Text(raw)
        for tag, a, b in spans:
            if b > start and a < end:
                line.stylize(TOKENS[tag], max(a, start) - start, min(b, end) - start)
        if lineno == err_line:
            line.stylize(ERR_LINE_STYLE)
        if gutter:
            out.append(_gutter(lineno, width), style=GUTTER_STYLE)
        out.append(line)
        out.append("\n")
        if lineno == err_line:
            if gutter:
                out.append(_gutter(0, width))
            # tabs stay tabs so the caret lines up with the text above it
            pad = "".join(c if c == "\t" else " " for c in raw[:err_col - 1])
            out.append(pad + "^", style=POINTER_STYLE)
            out.append("\n")
        start = end + 1
    return out
