"""Typed value nodes reported by the SASS compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class VString:
    value: str


@dataclass(frozen=True)
class VBool:
    value: bool


@dataclass(frozen=True)
class VNull:
    value: None = None


@dataclass(frozen=True)
class VNumber:
    value: float
    unit: str = ""


@dataclass(frozen=True)
class Rgba:
    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class VColor:
    value: Rgba


@dataclass(frozen=True)
class VList:
    value: tuple["Value", ...] = ()
    separator: str = "space"  # "space" | "comma"


@dataclass(frozen=True)
class VMap:
    value: dict[str, "Value"] = field(default_factory=dict)


@dataclass(frozen=True)
class VOther:
    """Anything the compiler hands back that has no dedicated kind."""

    value: object


Value = Union[VString, VBool, VNull, VNumber, VColor, VList, VMap, VOther]


def format_number(v: float) -> str:
    """Render a number the way a stylesheet would print it.

    Integral values lose their fractional part (``16.0`` -> ``"16"``);
    everything else keeps the shortest round-trip form.
    """
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)
