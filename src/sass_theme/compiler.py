"""Compiler adapter: run libsass and report global variable values."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import sass

from .scanner import collect_declarations
from .values import Rgba, Value, VBool, VColor, VList, VMap, VNull, VNumber, VOther, VString

logger = logging.getLogger(__name__)

EXTRACT_FUNCTION = "sass_theme_extract"

# Options the adapter owns; the source is always the target file.
_SOURCE_OPTIONS = ("file", "filename", "string", "dirname")


@dataclass
class RenderResult:
    """Compiled CSS plus the variable scopes the compiler reported."""

    css: str
    vars: dict[str, dict[str, Value]] = field(default_factory=dict)
    included_files: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def render_sync(options: Mapping[str, Any]) -> RenderResult:
    """Compile ``options["file"]`` and collect its global variables.

    Every other key is handed to :func:`sass.compile` as a keyword argument.
    Compiler errors propagate unchanged.
    """
    path = Path(options["file"])
    compile_kwargs = {k: v for k, v in options.items() if k not in _SOURCE_OPTIONS}
    discarded = sorted(k for k in options if k in _SOURCE_OPTIONS and k != "file")
    if discarded:
        logger.debug("Ignoring compiler options %s; compiling %s", discarded, path)

    include_paths = _include_paths(compile_kwargs.get("include_paths"))
    names, files = collect_declarations(path, include_paths)
    indented = path.suffix == ".sass"

    collected: dict[int, Value] = {}

    def sass_theme_extract(index, value):
        collected[int(index.value)] = from_sass(value)
        return None

    source = path.read_text(encoding="utf-8")
    source += _extraction_block(names, indented)

    compile_kwargs["include_paths"] = [str(path.parent), *include_paths]
    compile_kwargs["custom_functions"] = _with_extractor(
        compile_kwargs.get("custom_functions"),
        sass.SassFunction(EXTRACT_FUNCTION, ("$index", "$value"), sass_theme_extract),
    )
    if indented:
        compile_kwargs["indented"] = True

    css = sass.compile(string=source, **compile_kwargs)

    variables: dict[str, dict[str, Value]] = {}
    if collected:
        # Report in declaration order, not evaluation order.
        variables["global"] = {
            f"${name}": collected[i] for i, name in enumerate(names) if i in collected
        }
    logger.debug("Extracted %d global variables from %s", len(collected), path)
    return RenderResult(css=css, vars=variables, included_files=files)


# ---------------------------------------------------------------------------
# Value conversion
# ---------------------------------------------------------------------------

def from_sass(value: Any) -> Value:
    """Convert a value handed over by libsass to a typed node."""
    if isinstance(value, bool):
        return VBool(value)
    if value is None:
        return VNull()
    if isinstance(value, str):
        return VString(value)
    if isinstance(value, sass.SassNumber):
        return VNumber(float(value.value), value.unit or "")
    if isinstance(value, sass.SassColor):
        return VColor(Rgba(value.r, value.g, value.b, value.a))
    if isinstance(value, sass.SassList):
        separator = "comma" if value.separator is sass.SASS_SEPARATOR_COMMA else "space"
        return VList(tuple(from_sass(item) for item in value.items), separator)
    if isinstance(value, sass.SassMap):
        return VMap({_map_key(k): from_sass(v) for k, v in value.items()})
    return VOther(value)


def _map_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    from .normalize import join_text, normalize
    return join_text(normalize(from_sass(key)))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _include_paths(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, (str, os.PathLike)):
        return [os.fspath(value)]
    return [os.fspath(p) for p in value]


def _with_extractor(custom_functions: Any, extractor: sass.SassFunction) -> list:
    if not custom_functions:
        return [extractor]
    if isinstance(custom_functions, Mapping):
        funcs = [sass.SassFunction.from_lambda(n, f) for n, f in custom_functions.items()]
    else:
        funcs = list(custom_functions)
    return [*funcs, extractor]


def _extraction_block(names: list[str], indented: bool) -> str:
    """SASS source that reports each variable, by position, to the extractor."""
    lines = [""]
    for i, name in enumerate(names):
        guard = f'@if global-variable-exists("{name}")'
        call = f"$__sass-theme-extract: {EXTRACT_FUNCTION}({i}, ${name})"
        if indented:
            lines.append(guard)
            lines.append(f"  {call}")
        else:
            lines.append(f"{guard} {{ {call}; }}")
    return "\n".join(lines) + "\n"
