"""Declaration scanner: finds global variable names and @import targets.

The compiler only reports values it is asked for, so before compiling we
need the names of the variables a stylesheet declares at the top level.
This module does a light lexical pass over the source (and every file it
imports) to collect them.  It does not evaluate anything: a name that turns
out not to exist at the end of compilation is skipped by the compiler
adapter.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

_DECL_RE = re.compile(r"\$([A-Za-z_][\w-]*)\s*:(?!:)")
_IMPORT_RE = re.compile(r"@import\s+([^;\n]+)")

SASS_EXTENSIONS = (".scss", ".sass", ".css")


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

def strip_comments(text: str) -> str:
    """Remove ``/* */`` and ``//`` comments, keeping line structure.

    Quoted strings are copied through untouched, and a ``//`` right after
    ``:`` is kept so unquoted ``url(http://...)`` survives.
    """
    out: list[str] = []
    quote: str | None = None
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if quote:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        if ch in "\"'":
            quote = ch
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end < 0:
                # Unclosed (indented-syntax comment): drop the rest of the line
                end = text.find("\n", i)
                end = n if end < 0 else end
            else:
                end += 2
            out.append("\n" * text.count("\n", i, end))
            i = end
            continue
        elif text.startswith("//", i) and (i == 0 or text[i - 1] != ":"):
            end = text.find("\n", i)
            i = n if end < 0 else end
            continue

        out.append(ch)
        i += 1

    return "".join(out)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

def global_declarations(text: str, indented: bool = False) -> list[str]:
    """Return variable names declared in the global scope of *text*.

    A declaration is global when it sits at nesting depth 0 or carries the
    ``!global`` flag.  Names are returned once, in order of first appearance.
    """
    names: list[str] = []
    for _, name in _scan_declarations(strip_comments(text), indented):
        _add_name(names, name)
    return names


def _add_name(names: list[str], name: str) -> None:
    # `$a-b` and `$a_b` are the same variable; the first spelling is kept
    key = name.replace("_", "-")
    if all(n.replace("_", "-") != key for n in names):
        names.append(name)


def _scan_declarations(text: str, indented: bool) -> list[tuple[int, str]]:
    if indented:
        return _scan_indented(text)
    return _scan_braced(text)


def _scan_braced(text: str) -> list[tuple[int, str]]:
    found: list[tuple[int, str]] = []
    depth = 0
    quote: str | None = None
    at_start = True
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        if ch in "\"'":
            quote = ch
            at_start = False
        elif ch == "{":
            depth += 1
            at_start = True
        elif ch == "}":
            depth = max(depth - 1, 0)
            at_start = True
        elif ch == ";":
            at_start = True
        elif ch == "$" and at_start:
            m = _DECL_RE.match(text, i)
            if m and (depth == 0 or _is_global_flagged(text, m.end())):
                found.append((i, m.group(1)))
            at_start = False
        elif not ch.isspace():
            at_start = False
        i += 1

    return found


def _scan_indented(text: str) -> list[tuple[int, str]]:
    found: list[tuple[int, str]] = []
    pos = 0
    for line in text.splitlines(keepends=True):
        stripped = line.lstrip()
        m = _DECL_RE.match(stripped)
        if m and (stripped == line or "!global" in stripped):
            found.append((pos + len(line) - len(stripped), m.group(1)))
        pos += len(line)
    return found


def _is_global_flagged(text: str, start: int) -> bool:
    end = start
    while end < len(text) and text[end] not in ";{}\n":
        end += 1
    return "!global" in text[start:end]


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------

def import_targets(text: str) -> list[str]:
    """Return the stylesheet paths named by ``@import`` rules in *text*.

    Plain CSS imports (``url(...)``, ``.css`` files and remote URLs) are
    left to the browser and skipped.
    """
    return [target for _, target in _scan_imports(strip_comments(text))]


def _scan_imports(text: str) -> list[tuple[int, str]]:
    found: list[tuple[int, str]] = []
    for m in _IMPORT_RE.finditer(text):
        for arg in m.group(1).split(","):
            target = arg.strip().strip("\"'")
            if target and not _is_plain_css(target):
                found.append((m.start(), target))
    return found


def _is_plain_css(target: str) -> bool:
    return (
        target.startswith(("url(", "http://", "https://", "//"))
        or target.endswith(".css")
    )


def resolve_import(
    target: str,
    base_dir: str | Path,
    include_paths: Iterable[str | Path] = (),
) -> Path | None:
    """Find the file an ``@import`` of *target* loads.

    Looks in *base_dir* first, then in each include path, applying the
    partial (``_name``) and extension rules.  Returns None when nothing
    matches; the compiler reports that itself.
    """
    for root in (base_dir, *include_paths):
        for candidate in _candidates(Path(root) / target):
            if candidate.is_file():
                return candidate
    return None


def _candidates(path: Path) -> list[Path]:
    parent, name = path.parent, path.name
    if path.suffix in SASS_EXTENSIONS:
        return [path, parent / f"_{name}"]
    out: list[Path] = []
    for ext in SASS_EXTENSIONS:
        out.append(parent / f"{name}{ext}")
        out.append(parent / f"_{name}{ext}")
    for ext in SASS_EXTENSIONS:
        out.append(path / f"_index{ext}")
        out.append(path / f"index{ext}")
    return out


# ---------------------------------------------------------------------------
# Import graph walk
# ---------------------------------------------------------------------------

def collect_declarations(
    file: str | Path,
    include_paths: Iterable[str | Path] = (),
) -> tuple[list[str], list[str]]:
    """Walk *file* and everything it imports.

    Returns ``(names, files)``: global variable names in source order (an
    import's declarations appear where the import does) and the files
    visited, entry file first.
    """
    names: list[str] = []
    files: list[str] = []
    _walk(Path(file), list(include_paths), names, files)
    logger.debug("Found %d global declarations in %d files", len(names), len(files))
    return names, files


def _walk(path: Path, include_paths: list, names: list[str], files: list[str]) -> None:
    resolved = str(path.resolve())
    if resolved in files:
        return
    files.append(resolved)

    logger.debug("Scanning %s", resolved)
    text = strip_comments(path.read_text(encoding="utf-8"))
    indented = path.suffix == ".sass"

    events: list[tuple[int, str, str]] = [
        (pos, "decl", name) for pos, name in _scan_declarations(text, indented)
    ]
    events += [(pos, "import", target) for pos, target in _scan_imports(text)]
    events.sort(key=lambda e: e[0])

    for _, kind, arg in events:
        if kind == "decl":
            _add_name(names, arg)
            continue
        found = resolve_import(arg, path.parent, include_paths)
        if found is not None:
            _walk(found, include_paths, names, files)
