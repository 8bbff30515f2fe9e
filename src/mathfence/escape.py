"""Escaping math spans so Markdown leaves them alone.

The Markdown renderer would read parts of a formula as markup, e.g. the
``_`` pairs in ``$a_1 + b_1$`` as emphasis, or ``[x^n](f + g)`` as a link.
Escaping ``_``, ``*`` and ``\\`` in advance makes the renderer emit the
original formula, which a client-side math script then typesets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathfence.stringbuilder import StringBuilder

if TYPE_CHECKING:
    from mathfence.delimiter import Delimiter

# Characters prefixed with a backslash
_ESCAPED = frozenset("_*\\")


def escape_math(item: str) -> str:
    """Backslash-escape ``_``, ``*`` and ``\\`` in ``item``."""
    if not any(char in _ESCAPED for char in item):
        return item
    return "".join(f"\\{char}" if char in _ESCAPED else char for char in item)


def escape_math_with_delimiter(item: str, delimiter: Delimiter) -> str:
    """Escape a math span and wrap it in its delimiters.

    The delimiters are escaped too: ``\\(`` must reach the math script as
    ``\\(``, so it is written ``\\\\(`` for Markdown.
    """
    sb = StringBuilder()
    sb.append(escape_math(delimiter.left))
    sb.append(escape_math(item))
    sb.append(escape_math(delimiter.right))
    return sb.build()


def unescape_math(text: str) -> str:
    """Remove the backslashes inserted by :func:`escape_math`.

    A backslash followed by one of the escaped characters is dropped;
    any other backslash is kept.
    """
    if "\\" not in text:
        return text

    sb = StringBuilder()
    i = 0
    text_len = len(text)
    while i < text_len:
        char = text[i]
        if char == "\\" and i + 1 < text_len and text[i + 1] in _ESCAPED:
            sb.append(text[i + 1])
            i += 2
        else:
            sb.append(char)
            i += 1
    return sb.build()


__all__ = ["escape_math", "escape_math_with_delimiter", "unescape_math"]
