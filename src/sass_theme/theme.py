"""Theme extraction: SASS file -> plain theme object."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from .compiler import render_sync
from .transform import transform

logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    """Options for :func:`extract_theme`.

    ``compiler_options`` is passed through to libsass as-is (for example
    ``include_paths`` or ``precision``); ``file`` is always set from the
    path being converted.
    """

    camel_case_keys: bool = False
    compiler_options: dict[str, Any] = field(default_factory=dict)


def extract_theme(file: str | os.PathLike, opts: ConversionOptions | None = None) -> dict[str, Any]:
    """Compile *file* and return its global variables as a theme object.

    Usage::

        theme = extract_theme("styles/_variables.scss",
                              ConversionOptions(camel_case_keys=True))
        theme["primaryColor"]   # -> "rgb(0, 102, 204)"

    Errors raised by the compiler (missing file, syntax errors, unresolved
    imports) propagate unchanged.
    """
    opts = opts or ConversionOptions()
    compiler_opts = {**opts.compiler_options, "file": os.fspath(file)}

    result = render_sync(compiler_opts)
    global_vars = result.vars.get("global") or {}
    logger.debug("Converting %d variables from %s", len(global_vars), compiler_opts["file"])
    return transform(global_vars, opts)
