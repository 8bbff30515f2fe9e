"""Math delimiter pairs.

A delimiter pair bounds a math span: ``$...$``, ``$$...$$``, ``\\(...\\)``.
Two pairs are configured per run, one for display math and one for inline
math. Both are immutable and shared read-only by every scan.

Thread Safety:
Delimiter is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mathfence.errors import ConfigError


@dataclass(frozen=True, slots=True)
class Delimiter:
    """Left and right marker strings of a math span.

    Matching is exact and case-sensitive. ``left`` and ``right`` may be
    equal (``$``/``$``) or distinct (``\\(``/``\\)``).

    Attributes:
        left: Opening marker (non-empty)
        right: Closing marker (non-empty)

    Examples:
            >>> Delimiter.same("$$")
            Delimiter(left='$$', right='$$')
            >>> Delimiter("\\\\(", "\\\\)").match_left("a \\\\(x\\\\)", 2)
            True

    """

    left: str
    right: str

    def __post_init__(self) -> None:
        if not isinstance(self.left, str) or not isinstance(self.right, str):
            raise ConfigError("delimiters must be strings")
        if not self.left or not self.right:
            raise ConfigError(f"delimiter strings must be non-empty, got {self.left!r}/{self.right!r}")

    @classmethod
    def same(cls, delimiter: str) -> Delimiter:
        """Delimiter with identical left and right markers."""
        return cls(delimiter, delimiter)

    @classmethod
    def from_value(cls, value: Any, key: str | None = None) -> Delimiter:
        """Build a delimiter from a config value.

        Accepts a ``{"left": ..., "right": ...}`` table or a single string
        used for both sides.

        Raises:
            ConfigError: If the value has the wrong shape
        """
        if isinstance(value, Delimiter):
            return value
        if isinstance(value, str):
            return cls.same(value)
        if isinstance(value, dict):
            try:
                return cls(value["left"], value["right"])
            except KeyError as exc:
                raise ConfigError(f"missing {exc.args[0]!r} in delimiter table", key=key) from exc
            except ConfigError as exc:
                raise ConfigError(exc.message, key=key) from exc
        raise ConfigError(f"expected a table with 'left' and 'right', got {value!r}", key=key)

    @property
    def first(self) -> str:
        """First character of the left marker."""
        return self.left[0]

    def match_left(self, source: str, pos: int) -> bool:
        """Whether the left marker occurs in ``source`` at ``pos``."""
        return source.startswith(self.left, pos)

    def wrap(self, content: str) -> str:
        """Surround ``content`` with the markers."""
        return f"{self.left}{content}{self.right}"


DEFAULT_BLOCK_DELIMITER = Delimiter.same("$$")
DEFAULT_INLINE_DELIMITER = Delimiter.same("$")

__all__ = ["DEFAULT_BLOCK_DELIMITER", "DEFAULT_INLINE_DELIMITER", "Delimiter"]
