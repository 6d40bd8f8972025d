"""Value normalizer: typed compiler node -> plain theme value."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Union

from .values import (
    Value,
    VBool,
    VColor,
    VList,
    VMap,
    VNull,
    VNumber,
    VString,
    format_number,
)

if TYPE_CHECKING:
    from .theme import ConversionOptions

ThemeValue = Union[str, bool, None, int, float, dict[str, Any]]

# https://www.w3.org/TR/css-fonts-3/#generic-font-families
GENERIC_FONT_FAMILIES = frozenset(
    ["serif", "sans-serif", "cursive", "fantasy", "monospace"]
)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def normalize(node: Value, opts: ConversionOptions | None = None) -> ThemeValue:
    """Convert one typed value node into a plain theme value.

    Unknown node kinds hand back their raw payload untouched.
    """
    if isinstance(node, (VString, VBool, VNull)):
        return node.value

    if isinstance(node, VNumber):
        if node.unit:
            return f"{format_number(node.value)}{node.unit}"
        return _bare_number(node.value)

    if isinstance(node, VColor):
        return format_color(node)

    if isinstance(node, VList):
        return _normalize_list(node, opts)

    if isinstance(node, VMap):
        from .transform import transform
        return transform(node.value, opts)

    return getattr(node, "value", node)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def quote_font_name(name: str) -> str:
    """Quote a font family name unless it is a generic CSS family."""
    return name if name.lower() in GENERIC_FONT_FAMILIES else f"'{name}'"


def format_color(node: VColor) -> str:
    c = node.value
    r, g, b = (_round_channel(ch) for ch in (c.r, c.g, c.b))
    if c.a != 1:
        return f"rgba({r}, {g}, {b}, {format_number(c.a)})"
    return f"rgb({r}, {g}, {b})"


def join_text(value: ThemeValue) -> str:
    """Coerce a normalized value to text for a space-joined list."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def _round_channel(v: float) -> int:
    # Halves go up: 10.5 -> 11, 200.5 -> 201
    return int(Decimal(v).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _bare_number(v: float) -> int | float:
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


def _normalize_list(node: VList, opts: ConversionOptions | None) -> str:
    is_font_list = all(isinstance(item, VString) for item in node.value)
    items = [normalize(item, opts) for item in node.value]
    if is_font_list:
        return ", ".join(quote_font_name(item) for item in items)
    return " ".join(join_text(item) for item in items)
