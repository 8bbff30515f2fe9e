"""Math typesetting engines.

An engine turns one math source into markup, or raises RenderError. The
span renderer treats it as a pure function: engines must not keep state
that changes between calls, because chapters and spans render in
parallel.

The default engine wraps latex2mathml and produces MathML, which browsers
render natively without a stylesheet or script.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from latex2mathml.converter import convert as latex2mathml_convert

from mathfence.errors import RenderError
from mathfence.macros import DEFAULT_MAX_EXPAND, expand_macros


@runtime_checkable
class MathEngine(Protocol):
    """Protocol for math engines.

    Thread Safety:
        ``render`` may be called concurrently from multiple threads.

    """

    def render(self, source: str, *, display: bool) -> str:
        """Render math source to markup.

        Args:
            source: Math source without delimiters
            display: True for display (block) math, False for inline

        Returns:
            Rendered markup

        Raises:
            RenderError: If the source cannot be rendered
        """
        ...


class Latex2MathMLEngine:
    """MathML engine backed by latex2mathml.

    User macros are expanded before conversion.

    Thread Safety:
        Holds only immutable options after construction.

    """

    __slots__ = ("_macros", "_max_expand")

    def __init__(
        self,
        macros: Mapping[str, str] | None = None,
        max_expand: int = DEFAULT_MAX_EXPAND,
    ) -> None:
        self._macros = dict(macros or {})
        self._max_expand = max_expand

    @property
    def macros(self) -> dict[str, str]:
        return dict(self._macros)

    def render(self, source: str, *, display: bool) -> str:
        expanded = expand_macros(source, self._macros, self._max_expand)
        try:
            return latex2mathml_convert(expanded, display="block" if display else "inline")
        except Exception as exc:
            # latex2mathml signals bad input with a mix of its own
            # exceptions and plain IndexError/KeyError/ValueError
            raise RenderError(f"latex2mathml: {type(exc).__name__}: {exc}", source) from exc


__all__ = ["Latex2MathMLEngine", "MathEngine"]
