"""Key/tree transformer: raw variable mapping -> theme object."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .normalize import normalize
from .values import Value

if TYPE_CHECKING:
    from .theme import ConversionOptions

# Words: acronyms before a capitalised word, Capitalised/lower runs, bare acronyms
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def camel_case(text: str) -> str:
    """Join the words of *text* in camelCase.

    Separators (``-``, ``_``, spaces) are dropped, as are the boundaries of
    existing camel humps and acronyms; digits stay attached.

    >>> camel_case("BRAND-COLOR"), camel_case("_private-var"), camel_case("UI-scale")
    ('brandColor', 'privateVar', 'uiScale')
    """
    words = [w.lower() for w in _WORD_RE.findall(text)]
    if not words:
        return ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def transform_key(key: str, camel: bool = False) -> str:
    """Strip one leading ``$`` and optionally camelCase the rest.

    >>> transform_key("$primary-color", camel=True)
    'primaryColor'
    """
    new_key = key[1:] if key.startswith("$") else key
    return camel_case(new_key) if camel else new_key


def transform(raw: Mapping[str, Value], opts: ConversionOptions | None = None) -> dict[str, Any]:
    """Rename every key and normalize every value of *raw*.

    Input order is kept; if two keys rename to the same thing the later
    one wins.
    """
    camel = bool(opts and opts.camel_case_keys)
    theme: dict[str, Any] = {}
    for key, node in raw.items():
        theme[transform_key(key, camel)] = normalize(node, opts)
    return theme
