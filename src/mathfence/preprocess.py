"""Chapter preprocessing: scan, render or escape, reassemble.

Per chapter: scanner events -> render tasks -> one fragment per task ->
fragments joined in task order, after the stylesheet header.

Chapters are independent, so a book is processed on a thread pool with an
order-preserving map. On free-threaded Python this runs chapters truly in
parallel; elsewhere it still overlaps the engine calls. A single chapter's
spans can also be spread over an executor.

Thread Safety:
Workers share only immutable inputs (config, options, engine, chapter
text) and the lock-protected FragmentCache.

"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Any

from mathfence.book import collect_chapters, replace_chapters
from mathfence.cache import FragmentCache, RenderCache
from mathfence.config import FALLBACK_SOURCE, PREPROCESSOR_NAME, ExtraOpts, MathConfig
from mathfence.engine import MathEngine
from mathfence.render import escape_task, render_task
from mathfence.stringbuilder import StringBuilder
from mathfence.tasks import get_render_tasks
from mathfence.utils.logger import get_logger

logger = get_logger(__name__)


def process_chapter_escape(
    raw_content: str,
    extra_opts: ExtraOpts,
    stylesheet_header: str = "",
) -> str:
    """Escape every math span of a chapter.

    Args:
        raw_content: Chapter source
        extra_opts: Run options
        stylesheet_header: Prepended to the output (empty for none)

    Returns:
        Chapter text with math spans escaped and re-delimited
    """
    sb = StringBuilder()
    sb.append(stylesheet_header)
    sb.extend(escape_task(task, extra_opts) for task in get_render_tasks(raw_content, extra_opts))
    return sb.build()


def process_chapter_prerender(
    raw_content: str,
    engine: MathEngine,
    stylesheet_header: str,
    extra_opts: ExtraOpts,
    *,
    fallback: str = FALLBACK_SOURCE,
    cache: RenderCache | None = None,
    executor: Executor | None = None,
) -> str:
    """Render every math span of a chapter.

    Args:
        raw_content: Chapter source
        engine: Math engine shared by the run
        stylesheet_header: Prepended to the output (empty for none)
        extra_opts: Run options
        fallback: Output of spans the engine rejects, "source" or "escape"
        cache: Optional fragment cache shared by the run
        executor: Render spans on this executor. Must not be the
            executor running this call (its workers would wait on
            themselves).

    Returns:
        Chapter text with math spans replaced by markup
    """
    tasks = get_render_tasks(raw_content, extra_opts)
    render = partial(
        render_task,
        engine=engine,
        extra_opts=extra_opts,
        fallback=fallback,
        cache=cache,
    )
    fragments = executor.map(render, tasks) if executor is not None else map(render, tasks)

    sb = StringBuilder()
    sb.append(stylesheet_header)
    sb.extend(fragments)
    return sb.build()


def process_all_chapters(
    chapters: Sequence[str],
    config: MathConfig,
    *,
    root: str | Path = ".",
    engine: MathEngine | None = None,
    max_workers: int | None = None,
) -> list[str]:
    """Process every chapter of a book, preserving order.

    The engine is built (and the macro file loaded) before any chapter is
    touched, so configuration errors abort the run with no output.

    Args:
        chapters: Chapter sources in book order
        config: Run configuration
        root: Book root, base of the macro file path
        engine: Engine to use instead of the configured default
        max_workers: Thread pool size (None = executor default)

    Returns:
        Processed chapters, same order and length as ``chapters``

    Raises:
        ConfigError: If the macro file cannot be loaded
    """
    extra_opts = config.build_extra_opts()
    header = config.stylesheet_header

    cache: FragmentCache | None = None
    if config.pre_render:
        if engine is None:
            engine = config.build_engine(root)
        cache = FragmentCache()
        worker = partial(
            process_chapter_prerender,
            engine=engine,
            stylesheet_header=header,
            extra_opts=extra_opts,
            fallback=config.fallback,
            cache=cache,
        )
    else:
        worker = partial(process_chapter_escape, extra_opts=extra_opts, stylesheet_header=header)

    if not chapters:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        contents = list(executor.map(worker, chapters))

    mode = "pre-rendered" if config.pre_render else "escaped"
    logger.debug("%s math in %d chapters", mode.capitalize(), len(contents))
    if cache is not None:
        logger.debug(
            "Fragment cache: %d distinct, %d hits, %d misses",
            len(cache),
            cache.hits,
            cache.misses,
        )
    return contents


class MathPreprocessor:
    """mdBook preprocessor rendering or escaping math.

    Usage:
        >>> pre = MathPreprocessor()
        >>> book = pre.run(context, book)

    """

    name = PREPROCESSOR_NAME

    __slots__ = ("_engine", "_max_workers")

    def __init__(
        self,
        *,
        engine: MathEngine | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._engine = engine
        self._max_workers = max_workers

    def supports_renderer(self, renderer: str) -> bool:
        """Output is Markdown with inline markup, usable by any renderer."""
        return True

    def run(self, context: dict[str, Any], book: dict[str, Any]) -> dict[str, Any]:
        """Process all chapters of ``book`` in place and return it.

        Raises:
            ConfigError: On invalid configuration or macro file
            PreprocessorError: On a malformed book
        """
        config = MathConfig.from_context(context)
        chapters = collect_chapters(book)
        logger.info(
            "%s math in %d chapters",
            "Rendering" if config.pre_render else "Escaping",
            len(chapters),
        )
        contents = process_all_chapters(
            chapters,
            config,
            root=context.get("root", "."),
            engine=self._engine,
            max_workers=self._max_workers,
        )
        return replace_chapters(book, contents)


__all__ = [
    "MathPreprocessor",
    "process_all_chapters",
    "process_chapter_escape",
    "process_chapter_prerender",
]
