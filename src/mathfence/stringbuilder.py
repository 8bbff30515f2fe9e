"""StringBuilder for O(n) chapter assembly.

Appends fragments to a list, joins once at the end: O(n) total instead of
O(n²) for repeated string concatenation. A chapter with many math spans is
assembled from hundreds of small fragments.

Thread Safety:
StringBuilder instances are local to each chapter or span being built.
No shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("$").append("x").append("$")
            >>> sb.build()
            '$x$'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a fragment (empty strings are skipped).

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def extend(self, strings: Iterable[str]) -> StringBuilder:
        """Append fragments in order.

        Returns:
            self for method chaining
        """
        self._parts.extend(s for s in strings if s)
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)
