from __future__ import annotations
import argparse, difflib, json, logging, os, sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from .formatter import MODES, FormatConfig, format_json, formatting_stats, loads_strict
from .render import render_result
from .validator import check, error_notification, validate_incremental

log = logging.getLogger(__name__)

CONFIG_FILE = "jsonlintplus.config.json"
LOG_LEVEL_ENV = "JSONLINTPLUS_LOG_LEVEL"
MAX_PARTIAL_CHARS = 300_000

# ------------------------------ Utilities ------------------------------
def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig")

def _normalize_eol(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")

def _write_text(path: Path, data: str) -> None:
    data = _normalize_eol(data)
    if not data.endswith("\n"):
        data += "\n"
    path.write_text(data, encoding="utf-8")

# ------------------------------ Config ------------------------------
DEFAULT_CONFIG: Dict[str, Any] = {
    "indent": 2,
    "mode": "beautify",
    "print_width": 120,
    "long_block_threshold": 20,
    "array_wrap": "collapse",
    "object_wrap": "collapse",
    "sort_keys": False,
    "remove_empty": False,
}

def _load_project_config(start_dir: Path) -> Dict[str, Any]:
    cur = start_dir
    root = Path(cur.anchor)
    while True:
        p = cur / CONFIG_FILE
        if p.exists():
            try:
                data = json.loads(p.read_text(encoding="utf-8"))
            except (OSError, ValueError) as ex:
                log.warning("ignoring %s: %s", p, ex)
                return {}
            if not isinstance(data, dict):
                log.warning("ignoring %s: top level is not an object", p)
                return {}
            known = {k: v for k, v in data.items() if k in DEFAULT_CONFIG}
            for k in sorted(set(data) - set(known)):
                log.warning("%s: unknown option %r", p, k)
            log.debug("loaded config from %s", p)
            return known
        if cur == root:
            break
        cur = cur.parent
    return {}

def _build_config(args) -> FormatConfig:
    cfg = DEFAULT_CONFIG.copy()
    cfg.update(_load_project_config(Path.cwd()))

    if args.mode is not None: cfg["mode"] = args.mode
    if args.indent is not None: cfg["indent"] = args.indent
    if args.tab: cfg["indent"] = "tab"
    if args.print_width is not None: cfg["print_width"] = args.print_width
    if args.long_block is not None: cfg["long_block_threshold"] = args.long_block
    if args.sort_keys: cfg["sort_keys"] = True
    if args.remove_empty: cfg["remove_empty"] = True
    return FormatConfig(**cfg)

def _expand_files(patterns: List[str]) -> List[Path]:
    out: List[Path] = []
    for pat in patterns:
        if any(ch in pat for ch in "*?[]"):
            out.extend([p for p in Path().glob(pat) if p.is_file()])
        else:
            p = Path(pat)
            if p.is_file():
                out.append(p)
            else:
                log.warning("no such file: %s", pat)
    seen, uniq = set(), []
    for p in out:
        rp = p.resolve()
        if rp not in seen:
            seen.add(rp); uniq.append(p)
    return uniq

# ------------------------------ Reporting ------------------------------
def _emit_json(result) -> None:
    sys.stdout.write(json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n")

def _report_invalid(name: str, result, args, out: Console) -> None:
    print(f"{name}: {error_notification(result)}", file=sys.stderr)
    print(f"{name}: expected {result.expected}", file=sys.stderr)
    if args.partial:
        out.print(render_result(result, gutter=not args.no_gutter), end="")

def _process(name: str, text: str, cfg: FormatConfig, args, out: Console) -> Optional[str]:
    """Formatted text, or None after reporting why `text` is not valid JSON."""
    text = _normalize_eol(text)
    if len(text) > args.max_size:
        # too large for partial formatting: locate the failure, show the text verbatim
        info = check(text)
        if info is None:
            return format_json(loads_strict(text), cfg)
        print(f"{name}: Invalid JSON: {info.message} (Line {info.line}, Column {info.column})", file=sys.stderr)
        if args.partial:
            sys.stdout.write(text)
        return None

    result = validate_incremental(text, cfg.indent_unit)
    if args.report == "json":
        _emit_json(result)
    if result.is_valid:
        return format_json(result.parsed_value, cfg)
    if args.report != "json":
        _report_invalid(name, result, args, out)
    return None

# ------------------------------ CLI ------------------------------
def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="jsonlintplus", description="Validate and format JSON, "
                                 "showing a partially formatted rendering up to the first error")
    ap.add_argument("paths", nargs="*", help="Files or globs to check and format")
    ap.add_argument("--write", "-w", action="store_true", help="Write formatted output back to files")
    ap.add_argument("--check", action="store_true", help="Exit 1 if any files would be changed")
    ap.add_argument("--diff", action="store_true", help="Show unified diff for changes")
    ap.add_argument("--stdin", action="store_true", help="Read from stdin and write to stdout")
    ap.add_argument("--mode", choices=MODES, help="Output layout (default beautify)")
    ap.add_argument("--indent", type=int, help="Indent size in spaces (default 2)")
    ap.add_argument("--tab", action="store_true", help="Indent with tabs")
    ap.add_argument("--print-width", type=int, help="Max line width for compact/wrap (default 120)")
    ap.add_argument("--long-block", type=int, help="Long block threshold in lines (default 20)")
    ap.add_argument("--sort-keys", action="store_true", help="Sort object keys recursively")
    ap.add_argument("--remove-empty", action="store_true", help="Drop null-valued properties")
    ap.add_argument("--partial", action="store_true",
                    help="On invalid input, print the text formatted up to the error")
    ap.add_argument("--no-gutter", action="store_true", help="Omit line numbers from --partial output")
    ap.add_argument("--report", choices=("text", "json"), default="text",
                    help="json: print the validation result as a JSON document")
    ap.add_argument("--stats", action="store_true", help="Print size/line statistics to stderr")
    ap.add_argument("--max-size", type=int, default=MAX_PARTIAL_CHARS,
                    help="Skip partial formatting above this many characters")
    ap.add_argument("--color", dest="color", action="store_true", default=None, help="Force colored output")
    ap.add_argument("--no-color", dest="color", action="store_false", help="Disable colored output")
    ap.add_argument("--log-level", type=str.upper, default=os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
                    choices=("DEBUG", "INFO", "WARNING", "ERROR"), help="Logging verbosity")
    return ap

def _console(args) -> Console:
    if args.color is None:
        return Console(highlight=False, soft_wrap=True)
    return Console(highlight=False, soft_wrap=True, force_terminal=args.color, no_color=not args.color)

def _print_stats(name: str, original: str, formatted: str) -> None:
    stats = formatting_stats(original, formatted)
    body = ", ".join(f"{k}={v:.1f}" if isinstance(v, float) else f"{k}={v}" for k, v in asdict(stats).items())
    print(f"{name}: {body}", file=sys.stderr)

def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")

    cfg = _build_config(args)
    out = _console(args)

    if args.stdin:
        original = sys.stdin.read()
        formatted = _process("<stdin>", original, cfg, args, out)
        if formatted is None:
            return 1
        if args.stats:
            _print_stats("<stdin>", original, formatted)
        if args.report != "json":
            sys.stdout.write(formatted)
        return 0

    files = _expand_files(args.paths) if args.paths else []
    if not files:
        print("jsonlintplus: No input files. Provide paths or use --stdin.", file=sys.stderr)
        return 2

    changed = invalid = 0
    for f in files:
        try:
            original = _read_text(f)
        except (OSError, UnicodeDecodeError) as ex:
            print(f"{f}: error: {ex}", file=sys.stderr)
            invalid += 1
            continue
        formatted = _process(str(f), original, cfg, args, out)
        if formatted is None:
            invalid += 1
            continue
        if args.stats:
            _print_stats(str(f), original, formatted)

        norm_original = _normalize_eol(original)
        if not norm_original.endswith("\n"):
            norm_original += "\n"

        if formatted != norm_original:
            changed += 1
            log.info("%s: would reformat", f)
            if args.diff and not args.write:
                diff = difflib.unified_diff(
                    norm_original.splitlines(keepends=True),
                    formatted.splitlines(keepends=True),
                    fromfile=str(f),
                    tofile=str(f) + " (formatted)",
                )
                sys.stdout.writelines(diff)
            if args.write:
                _write_text(f, formatted)

    if invalid or (args.check and changed):
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
