"""Run configuration for mathfence.

Configuration is read once per book build from the ``[preprocessor.mathfence]``
table of ``book.toml`` (mdBook hands it over as JSON), validated, and frozen.
Every chapter and span of the run reads the same instance.

Usage:
    # From the mdBook context
    config = MathConfig.from_context(context)

    # From a plain dict (kebab-case or snake_case keys)
    config = MathConfig.from_dict({"pre-render": False, "include-src": True})

    extra_opts = config.build_extra_opts()
    engine = config.build_engine(root)  # loads the macro file

Thread Safety:
MathConfig and ExtraOpts are frozen dataclasses (immutable after creation).

"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from mathfence.delimiter import DEFAULT_BLOCK_DELIMITER, DEFAULT_INLINE_DELIMITER, Delimiter
from mathfence.engine import Latex2MathMLEngine
from mathfence.errors import ConfigError
from mathfence.macros import DEFAULT_MAX_EXPAND, load_macros

PREPROCESSOR_NAME = "mathfence"

# What a span whose rendering failed turns into
FALLBACK_SOURCE = "source"  # original delimited source, unchanged
FALLBACK_ESCAPE = "escape"  # escaped delimited source, for client-side rendering
FALLBACKS = frozenset({FALLBACK_SOURCE, FALLBACK_ESCAPE})

# Header that points to the CDN for the KaTeX stylesheet
STYLESHEET_HEADER = (
    '<link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/katex@0.16.4/dist/katex.min.css">'
    "\n\n"
)


@dataclass(frozen=True, slots=True)
class ExtraOpts:
    """Options every render task of a run reads.

    Attributes:
        include_src: Embed the math source next to rendered markup
        block_delimiter: Delimiter of display math
        inline_delimiter: Delimiter of inline math

    """

    include_src: bool = False
    block_delimiter: Delimiter = DEFAULT_BLOCK_DELIMITER
    inline_delimiter: Delimiter = DEFAULT_INLINE_DELIMITER

    def delimiter(self, display: bool) -> Delimiter:
        """Delimiter of display or inline math."""
        return self.block_delimiter if display else self.inline_delimiter


@dataclass(frozen=True, slots=True)
class MathConfig:
    """Immutable preprocessor configuration.

    Attributes:
        pre_render: Render math to MathML; False escapes it for a
            client-side script instead
        no_css: Do not prepend the stylesheet header to chapters
        include_src: Embed the math source in rendered output
        macros: Path of the macro file, relative to the book root
        block_delimiter: Delimiter of display math
        inline_delimiter: Delimiter of inline math
        max_expand: Limit on macro expansions per span (below 1, any
            expansion fails)
        fallback: Output of a span that fails to render, "source" or "escape"

    """

    pre_render: bool = True
    no_css: bool = False
    include_src: bool = False
    macros: str | None = None
    block_delimiter: Delimiter = DEFAULT_BLOCK_DELIMITER
    inline_delimiter: Delimiter = DEFAULT_INLINE_DELIMITER
    max_expand: int = DEFAULT_MAX_EXPAND
    fallback: str = FALLBACK_SOURCE

    def __post_init__(self) -> None:
        for name in ("pre_render", "no_css", "include_src"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"expected a boolean, got {getattr(self, name)!r}", key=_kebab(name))
        if self.macros is not None and not isinstance(self.macros, str):
            raise ConfigError(f"expected a path string, got {self.macros!r}", key="macros")
        for name in ("block_delimiter", "inline_delimiter"):
            if not isinstance(getattr(self, name), Delimiter):
                raise ConfigError(f"expected a delimiter, got {getattr(self, name)!r}", key=_kebab(name))
        if isinstance(self.max_expand, bool) or not isinstance(self.max_expand, int):
            raise ConfigError(f"expected an integer, got {self.max_expand!r}", key="max-expand")
        if self.fallback not in FALLBACKS:
            choices = ", ".join(sorted(FALLBACKS))
            raise ConfigError(f"expected one of {choices}, got {self.fallback!r}", key="fallback")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> MathConfig:
        """Create MathConfig from a ``[preprocessor.mathfence]`` table.

        Keys may be kebab-case (as in ``book.toml``) or snake_case. Keys
        that are not MathConfig fields are ignored; mdBook itself adds
        ``command``, ``renderers``, ``before`` and ``after``.

        Example:
            >>> config = MathConfig.from_dict({
            ...     "pre-render": False,
            ...     "inline-delimiter": {"left": "\\\\(", "right": "\\\\)"},
            ...     "command": "mathfence",
            ... })
            >>> config.inline_delimiter.left
            '\\\\('

        Raises:
            ConfigError: On a value of the wrong type or shape
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = key.replace("-", "_")
            if name not in valid_fields:
                continue
            if name in ("block_delimiter", "inline_delimiter"):
                value = Delimiter.from_value(value, key=_kebab(name))
            filtered[name] = value
        return cls(**filtered)

    @classmethod
    def from_context(cls, context: dict[str, Any]) -> MathConfig:
        """Create MathConfig from an mdBook preprocessor context.

        A book without a ``[preprocessor.mathfence]`` table gets defaults.
        """
        book_config = context.get("config") or {}
        table = (book_config.get("preprocessor") or {}).get(PREPROCESSOR_NAME) or {}
        if not isinstance(table, dict):
            raise ConfigError(f"expected a table, got {table!r}")
        return cls.from_dict(table)

    @property
    def stylesheet_header(self) -> str:
        return "" if self.no_css else STYLESHEET_HEADER

    def build_extra_opts(self) -> ExtraOpts:
        """Options shared by every render task of the run."""
        return ExtraOpts(
            include_src=self.include_src,
            block_delimiter=self.block_delimiter,
            inline_delimiter=self.inline_delimiter,
        )

    def build_engine(self, root: str | Path = ".") -> Latex2MathMLEngine:
        """Load macros relative to ``root`` and build the default engine.

        Raises:
            MacroFileError: If the macro file cannot be loaded
        """
        return Latex2MathMLEngine(load_macros(root, self.macros), self.max_expand)


def _kebab(name: str) -> str:
    return name.replace("_", "-")


__all__ = [
    "ExtraOpts",
    "FALLBACKS",
    "FALLBACK_ESCAPE",
    "FALLBACK_SOURCE",
    "MathConfig",
    "PREPROCESSOR_NAME",
    "STYLESHEET_HEADER",
]
