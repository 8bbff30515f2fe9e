"""
mathfence — Math-span preprocessor for Markdown

Finds math spans ($...$, $$...$$, or any configured delimiters) in Markdown
text without parsing the Markdown, skipping code spans and fenced code, and
either pre-renders them to MathML or escapes them so the Markdown renderer
passes them through for client-side KaTeX.

Quick Start:
    >>> from mathfence import MathConfig, process
    >>> process("Area: $\\\\pi r^2$", MathConfig(no_css=True))
    'Area: <math xmlns="http://www.w3.org/1998/Math/MathML" display="inline">...</math>'

    >>> # Escaping mode, for KaTeX in the browser
    >>> process("$a_1 * b_1$", MathConfig(pre_render=False, no_css=True))
    '$a\\\\_1 \\\\* b\\\\_1$'

Low-level:
    >>> from mathfence import Delimiter, scan
    >>> [e.type.name for e in scan(r"\\(x\\)", inline_delimiter=Delimiter("\\\\(", "\\\\)"))]
    ['BEGIN', 'INLINE_END', 'BEGIN']

mdBook:
    [preprocessor.mathfence]
    pre-render = true
"""

from pathlib import Path

from mathfence.cache import FragmentCache, RenderCache
from mathfence.config import STYLESHEET_HEADER, ExtraOpts, MathConfig
from mathfence.delimiter import Delimiter
from mathfence.engine import Latex2MathMLEngine, MathEngine
from mathfence.errors import (
    ConfigError,
    MacroFileError,
    MathfenceError,
    PreprocessorError,
    RenderError,
)
from mathfence.escape import escape_math, escape_math_with_delimiter, unescape_math
from mathfence.events import Event, EventType
from mathfence.macros import expand_macros, load_macros, parse_macros
from mathfence.preprocess import (
    MathPreprocessor,
    process_all_chapters,
    process_chapter_escape,
    process_chapter_prerender,
)
from mathfence.render import render_math
from mathfence.scanner import Scanner, scan
from mathfence.tasks import RenderTask, TaskKind, get_render_tasks

__version__ = "0.3.0"


def process(
    source: str,
    config: MathConfig | None = None,
    *,
    root: str | Path = ".",
    engine: MathEngine | None = None,
) -> str:
    """Process a single Markdown document.

    Args:
        source: Markdown source text
        config: Run configuration (defaults if None)
        root: Base directory of the configured macro file
        engine: Engine to use instead of the configured default

    Returns:
        Processed text, with the stylesheet header unless ``no_css``

    Raises:
        ConfigError: If the macro file cannot be loaded
    """
    config = config or MathConfig()
    extra_opts = config.build_extra_opts()
    if not config.pre_render:
        return process_chapter_escape(source, extra_opts, config.stylesheet_header)
    return process_chapter_prerender(
        source,
        engine or config.build_engine(root),
        config.stylesheet_header,
        extra_opts,
        fallback=config.fallback,
    )


__all__ = [
    # Main API
    "process",
    "process_all_chapters",
    "process_chapter_escape",
    "process_chapter_prerender",
    "MathPreprocessor",
    # Configuration
    "MathConfig",
    "ExtraOpts",
    "Delimiter",
    "STYLESHEET_HEADER",
    # Scanning
    "Scanner",
    "scan",
    "Event",
    "EventType",
    "RenderTask",
    "TaskKind",
    "get_render_tasks",
    # Rendering
    "MathEngine",
    "Latex2MathMLEngine",
    "render_math",
    "escape_math",
    "escape_math_with_delimiter",
    "unescape_math",
    "FragmentCache",
    "RenderCache",
    # Macros
    "expand_macros",
    "load_macros",
    "parse_macros",
    # Errors
    "MathfenceError",
    "ConfigError",
    "MacroFileError",
    "RenderError",
    "PreprocessorError",
    "__version__",
]
