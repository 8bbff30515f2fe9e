"""Projection of scanner events onto render tasks.

Each task is a classified range of the chapter source. Tasks are
independent of each other: any of them can be rendered in any order, on
any thread, as long as outputs are joined back in task order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from mathfence.events import EventType
from mathfence.scanner import Scanner

if TYPE_CHECKING:
    from mathfence.config import ExtraOpts


class TaskKind(Enum):
    """What a render task holds."""

    TEXT = auto()
    INLINE_MATH = auto()
    DISPLAY_MATH = auto()


_END_KINDS = {
    EventType.TEXT_END: TaskKind.TEXT,
    EventType.INLINE_END: TaskKind.INLINE_MATH,
    EventType.BLOCK_END: TaskKind.DISPLAY_MATH,
}


@dataclass(frozen=True, slots=True)
class RenderTask:
    """A classified range ``[start, end)`` of ``source``.

    For math tasks the range covers the content only, delimiters excluded.
    The content is sliced on access; building tasks copies nothing.
    """

    kind: TaskKind
    source: str
    start: int
    end: int

    @property
    def content(self) -> str:
        return self.source[self.start : self.end]

    @property
    def is_math(self) -> bool:
        return self.kind is not TaskKind.TEXT

    def __repr__(self) -> str:
        return f"RenderTask({self.kind.name}, {self.content!r})"


def get_render_tasks(raw_content: str, extra_opts: ExtraOpts) -> list[RenderTask]:
    """Find all render tasks in ``raw_content``.

    Walks the scanner events once, pairing each BEGIN with the event that
    ends its span. Empty text ranges are dropped. Whatever follows the
    last checkpoint (including an unterminated math span with its opening
    delimiter) becomes a trailing text task.

    Args:
        raw_content: Chapter source
        extra_opts: Run options carrying both delimiters

    Returns:
        Tasks in document order
    """
    scanner = Scanner(
        raw_content,
        extra_opts.block_delimiter,
        extra_opts.inline_delimiter,
    )

    tasks: list[RenderTask] = []
    checkpoint = 0
    for event in scanner.scan():
        if event.type is EventType.BEGIN:
            checkpoint = event.offset
            continue
        kind = _END_KINDS[event.type]
        if not event.is_math_end and event.offset == checkpoint:
            continue
        tasks.append(RenderTask(kind, raw_content, checkpoint, event.offset))
        checkpoint = event.offset

    if len(raw_content) > checkpoint:
        tasks.append(RenderTask(TaskKind.TEXT, raw_content, checkpoint, len(raw_content)))
    return tasks


__all__ = ["RenderTask", "TaskKind", "get_render_tasks"]
