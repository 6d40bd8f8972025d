"""sass-theme — convert SASS variables into a styled-components theme object."""

from .compiler import RenderResult, from_sass, render_sync
from .normalize import normalize
from .theme import ConversionOptions, extract_theme
from .transform import transform, transform_key
from .values import (
    Rgba,
    Value,
    VBool,
    VColor,
    VList,
    VMap,
    VNull,
    VNumber,
    VOther,
    VString,
)

__all__ = [
    "extract_theme",
    "ConversionOptions",
    "normalize",
    "transform",
    "transform_key",
    "render_sync",
    "from_sass",
    "RenderResult",
    "Value",
    "VString",
    "VBool",
    "VNull",
    "VNumber",
    "Rgba",
    "VColor",
    "VList",
    "VMap",
    "VOther",
]
