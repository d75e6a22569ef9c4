"""Command-line tool for listing and editing Rockchip CFG files."""

from __future__ import annotations

import re
import sys
from collections import deque
from collections.abc import Sequence
from typing import Optional

from .rkcfg import Config, Entry, RKCfgError, read_rkcfg, write_rkcfg

VERSION = "1.0.0"

HELP = """Usage:
  rkcfgtool <cfg> [--create] [actions…] [-o <output.cfg>]
  rkcfgtool --help | --version

Actions (may repeat; executed in order):
  --list                         List entries (default)
  --set-path <idx> <newPath>     Change path of entry <idx>
  --set-name <idx> <newName>     Change name of entry <idx>
  --add      <name> <path>       Append a new entry
  --del      <idx>               Delete entry <idx>
  --enable   <idx> <1|0>         Set enable flag of entry <idx>
  --json                         Output entries as JSON
  --script                       Output entries as machine readable text
  --create                       Start a new CFG instead of reading one
  -o, --output <file>            Write result to <file>
  -V, --version                  Show rkcfgtool version
  -h, --help                     Show this help message

  <idx> may be -1 to target the last entry
"""

_INTEGER = re.compile(r"\s*([+-]?\d+)")

_JSON_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


class _IndexError(Exception):
    """An entry index that does not name an existing entry."""


def _to_int(arg: str) -> int:
    """Parse the leading integer of *arg*, ignoring anything after it."""
    match = _INTEGER.match(arg)
    if match is None:
        raise ValueError(f"Invalid number: {arg}")
    return int(match.group(1))


def parse_index(items: Sequence[Entry], arg: str) -> Optional[int]:
    """Turn *arg* into a position in *items*; -1 means the last entry.

    Returns None when the index is out of range and raises ValueError when
    *arg* is not a number.
    """
    idx = _to_int(arg)
    if idx == -1:
        return len(items) - 1 if items else None
    if idx < 0 or idx >= len(items):
        return None
    return idx


def json_escape(text: str) -> str:
    """Escape *text* for embedding in a JSON string literal."""
    return "".join(
        _JSON_ESCAPES.get(ch, f"\\u{ord(ch):04x}" if ord(ch) < 0x20 else ch)
        for ch in text
    )


def format_json(items: Sequence[Entry]) -> str:
    """Render the entries as a JSON array, one object per line."""
    rows = (
        f'  {{"index":{i},"name":"{json_escape(e.name)}",'
        f'"path":"{json_escape(e.path)}","enabled":{e.selected}}}'
        for i, e in enumerate(items)
    )
    return "[\n" + ",\n".join(rows) + "\n]\n"


def format_script(items: Sequence[Entry]) -> str:
    """Render the entries as comma-separated lines with a header row."""
    lines = ["index,enabled,name,path\n"]
    lines.extend(
        f"{i},{e.selected},{e.name},{e.path}\n" for i, e in enumerate(items)
    )
    return "".join(lines)


def format_list(items: Sequence[Entry]) -> str:
    """Render the entries as a human-readable list."""
    lines = [f"=== Entry list ({len(items)}) ===\n"]
    lines.extend(
        f"{i:>2} {e.selected} {e.name} {e.path}\n" for i, e in enumerate(items)
    )
    return "".join(lines)


def _require_index(items: Sequence[Entry], arg: str) -> int:
    idx = parse_index(items, arg)
    if idx is None:
        raise _IndexError
    return idx


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the tool with *argv* (defaults to the process arguments)."""
    args = list(sys.argv[1:] if argv is None else argv)

    for arg in args:
        if arg in ("--help", "-h"):
            sys.stdout.write(HELP)
            return 0
        if arg in ("--version", "-V"):
            sys.stdout.write(f"rkcfgtool {VERSION}\n")
            return 0

    if not args:
        sys.stdout.write(HELP)
        return 0

    in_file = args[0]
    create = "--create" in args[1:]

    if create:
        config = Config.create()
    else:
        try:
            config = read_rkcfg(in_file)
        except RKCfgError as exc:
            sys.stderr.write(f"{exc}\n")
            return 1

    items = config.entries
    json_out = False
    script_out = False
    out_file = ""
    modified = create

    pending = deque(args[1:])
    try:
        while pending:
            arg = pending.popleft()
            if arg == "--list":
                pass
            elif arg == "--set-path" and len(pending) >= 2:
                idx_arg, new_path = pending.popleft(), pending.popleft()
                items[_require_index(items, idx_arg)].set_path(new_path)
                modified = True
            elif arg == "--set-name" and len(pending) >= 2:
                idx_arg, new_name = pending.popleft(), pending.popleft()
                items[_require_index(items, idx_arg)].set_name(new_name)
                modified = True
            elif arg == "--add" and len(pending) >= 2:
                name, path = pending.popleft(), pending.popleft()
                items.append(Entry.new(name, path))
                modified = True
            elif arg == "--del" and len(pending) >= 1:
                del items[_require_index(items, pending.popleft())]
                modified = True
            elif arg == "--enable" and len(pending) >= 2:
                idx = parse_index(items, pending.popleft())
                flag = _to_int(pending.popleft())
                if idx is None:
                    raise _IndexError
                items[idx].selected = 1 if flag else 0
                modified = True
            elif arg == "--json":
                json_out = True
            elif arg == "--script":
                script_out = True
            elif arg in ("-o", "--output") and len(pending) >= 1:
                out_file = pending.popleft()
            elif arg == "--create":
                pass
            else:
                sys.stderr.write(f"Unknown or incomplete option: {arg}\n")
                return 1
    except _IndexError:
        sys.stderr.write("Index out of range\n")
        return 1
    except ValueError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    if json_out:
        sys.stdout.write(format_json(items))
    elif script_out:
        sys.stdout.write(format_script(items))
    else:
        sys.stdout.write(format_list(items))

    if modified and not out_file:
        out_file = in_file

    if out_file:
        try:
            written = write_rkcfg(out_file, config)
        except RKCfgError as exc:
            sys.stderr.write(f"{exc}\n")
            return 1
        sys.stdout.write(f"Written {out_file} ({written} bytes)\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())