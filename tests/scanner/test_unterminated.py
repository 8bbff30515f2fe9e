"""Unterminated math spans and code spans.

Neither is an error: the scan stops and everything from the unclosed
opener on is kept as text.
"""

from mathfence.config import ExtraOpts
from mathfence.scanner import scan
from mathfence.tasks import TaskKind, get_render_tasks


def task_list(source: str) -> list[tuple[TaskKind, str]]:
    return [(task.kind, task.content) for task in get_render_tasks(source, ExtraOpts())]


class TestUnterminatedMath:
    def test_lone_dollar(self) -> None:
        source = "Price: $5 and more"
        assert list(scan(source)) == []
        assert task_list(source) == [(TaskKind.TEXT, source)]

    def test_after_closed_span(self) -> None:
        assert task_list("$a$ then $b") == [
            (TaskKind.INLINE_MATH, "a"),
            (TaskKind.TEXT, " then $b"),
        ]

    def test_block_is_not_retried_as_inline(self) -> None:
        source = "$$\nx = 1\n"
        assert task_list(source) == [(TaskKind.TEXT, source)]

    def test_later_spans_are_text(self) -> None:
        """Scanning stops at the unclosed opener."""
        source = "$$a$$ b $$c $d$"
        assert task_list(source) == [
            (TaskKind.DISPLAY_MATH, "a"),
            (TaskKind.TEXT, " b $$c $d$"),
        ]


class TestUnterminatedCode:
    def test_rest_is_text(self) -> None:
        assert task_list("$a$ `code $b$") == [
            (TaskKind.INLINE_MATH, "a"),
            (TaskKind.TEXT, " `code $b$"),
        ]

    def test_unclosed_fence(self) -> None:
        source = "```\n$x$\n"
        assert list(scan(source)) == []
        assert task_list(source) == [(TaskKind.TEXT, source)]
