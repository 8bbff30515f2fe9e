"""Render math spans to markup.

Each span renders on its own: it reads only the shared engine, the run's
options and its own source, and returns its own fragment. A failing span
falls back to literal output and never affects its siblings.
"""

from __future__ import annotations

from html import escape as html_escape
from typing import TYPE_CHECKING

from mathfence.config import FALLBACK_ESCAPE, FALLBACK_SOURCE
from mathfence.errors import RenderError
from mathfence.escape import escape_math_with_delimiter
from mathfence.tasks import RenderTask, TaskKind
from mathfence.utils.logger import get_logger

if TYPE_CHECKING:
    from mathfence.cache import RenderCache
    from mathfence.config import ExtraOpts
    from mathfence.engine import MathEngine

logger = get_logger(__name__)


def wrap_source(item: str, rendered: str) -> str:
    """Wrap rendered markup in a ``<data>`` element carrying the source.

    Keeps the formula available for copy-paste and assistive tools.
    Quotes and newlines in the source are escaped for the attribute.
    """
    value = html_escape(item, quote=True).replace("\n", "&#10;")
    return f'<data class="math-src" value="{value}">{rendered}</data>'


def render_math(
    item: str,
    *,
    display: bool,
    engine: MathEngine,
    extra_opts: ExtraOpts,
    fallback: str = FALLBACK_SOURCE,
    cache: RenderCache | None = None,
) -> str:
    """Render one math span.

    Newlines in the engine output become spaces: a raw newline inside
    inline HTML can end the paragraph in the Markdown renderer.

    Args:
        item: Math source, delimiters excluded
        display: Display (block) math rather than inline
        engine: Math engine
        extra_opts: Run options (delimiters, include_src)
        fallback: "source" or "escape", used when the engine fails
        cache: Optional fragment cache shared by the run

    Returns:
        Rendered fragment, or the fallback literal
    """
    rendered = cache.get(item, display=display) if cache is not None else None
    if rendered is None:
        try:
            rendered = engine.render(item, display=display).replace("\n", " ")
        except RenderError as exc:
            mode = "display" if display else "inline"
            logger.warning("Keeping %s math unrendered: %s: %r", mode, exc, item)
            delimiter = extra_opts.delimiter(display)
            if fallback == FALLBACK_ESCAPE:
                return escape_math_with_delimiter(item, delimiter)
            return delimiter.wrap(item)
        if cache is not None:
            cache.put(item, rendered, display=display)

    if extra_opts.include_src:
        return wrap_source(item, rendered)
    return rendered


def render_text(task: RenderTask) -> str:
    """Text passes through unchanged."""
    return task.content


def render_task(
    task: RenderTask,
    engine: MathEngine,
    extra_opts: ExtraOpts,
    fallback: str = FALLBACK_SOURCE,
    cache: RenderCache | None = None,
) -> str:
    """Output fragment of one task: text passes through, math renders."""
    if not task.is_math:
        return render_text(task)
    return render_math(
        task.content,
        display=task.kind is TaskKind.DISPLAY_MATH,
        engine=engine,
        extra_opts=extra_opts,
        fallback=fallback,
        cache=cache,
    )


def escape_task(task: RenderTask, extra_opts: ExtraOpts) -> str:
    """Output fragment of one task in escaping mode."""
    if not task.is_math:
        return render_text(task)
    delimiter = extra_opts.delimiter(task.kind is TaskKind.DISPLAY_MATH)
    return escape_math_with_delimiter(task.content, delimiter)


__all__ = ["escape_task", "render_math", "render_task", "render_text", "wrap_source"]
