from __future__ import annotations
from dataclasses import dataclass
from typing import List

# ------------------------------ Automaton ------------------------------
@dataclass(frozen=True)
class AutomatonState:
    depth: int = 0
    in_string: bool = False
    escape_next: bool = False

@dataclass
class PartialResult:
    formatted_prefix: str
    formatted_error_offset: int
    suffix_raw: str

def advance(state: AutomatonState, ch: str) -> AutomatonState:
    """One transition over `ch`; depth and string tracking only, no output."""
    if state.in_string:
        if state.escape_next:
            return AutomatonState(state.depth, True, False)
        if ch == "\\":
            return AutomatonState(state.depth, True, True)
        if ch == '"':
            return AutomatonState(state.depth, False, False)
        return state
    if ch == '"':
        return AutomatonState(state.depth, True, False)
    if ch in "{[":
        return AutomatonState(state.depth + 1, False, False)
    if ch in "}]":
        return AutomatonState(max(0, state.depth - 1), False, False)
    return state

def _bounded(source: str, boundary: int) -> int:
    return max(0, min(len(source), boundary))

def replay(source: str, boundary: int) -> AutomatonState:
    state = AutomatonState()
    for ch in source[:_bounded(source, boundary)]:
        state = advance(state, ch)
    return state

# ------------------------------ Re-indent ------------------------------
def format_prefix(source: str, boundary: int, indent_unit: str = "  ") -> PartialResult:
    """Re-indent `source[:boundary]` without requiring it to be well-formed.

    The text past the boundary is returned untouched as `suffix_raw`.
    """
    n = _bounded(source, boundary)
    out: List[str] = []
    state = AutomatonState()
    for ch in source[:n]:
        if state.in_string:
            out.append(ch)
            state = advance(state, ch)
            continue
        if ch == '"':
            out.append(ch)
        elif ch in "{[":
            out.append(ch); out.extend("\n" + indent_unit * (state.depth + 1))
        elif ch in "}]":
            while out and out[-1] in " \t": out.pop()
            out.extend("\n" + indent_unit * max(0, state.depth - 1)); out.append(ch)
        elif ch == ",":
            out.append(ch); out.extend("\n" + indent_unit * state.depth)
        elif ch == ":":
            out.extend(": ")
        elif ch.isspace():
            if out and not out[-1].isspace(): out.append(" ")
        else:
            out.append(ch)
        state = advance(state, ch)
    formatted = "".join(out)
    return PartialResult(formatted, len(formatted), source[n:])
