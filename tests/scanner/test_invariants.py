"""Property-based tests for scanner invariants using Hypothesis."""

from hypothesis import given, settings
from hypothesis import strategies as st

from mathfence.config import ExtraOpts
from mathfence.delimiter import Delimiter
from mathfence.events import EventType
from mathfence.scanner import Scanner
from mathfence.tasks import TaskKind, get_render_tasks

# Characters the scanner reacts to, plus some filler
MARKDOWN_ISH = st.text(alphabet="$\\`ab _\n", max_size=200)

PAREN_OPTS = ExtraOpts(
    block_delimiter=Delimiter("\\[", "\\]"),
    inline_delimiter=Delimiter("\\(", "\\)"),
)


def reconstruct(source: str, extra_opts: ExtraOpts) -> str:
    parts = []
    for task in get_render_tasks(source, extra_opts):
        if task.kind is TaskKind.TEXT:
            parts.append(task.content)
        else:
            delimiter = extra_opts.delimiter(task.kind is TaskKind.DISPLAY_MATH)
            parts.append(delimiter.wrap(task.content))
    return "".join(parts)


class TestEventInvariants:
    """Properties of the raw event stream."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_never_raises(self, source: str) -> None:
        Scanner(source).run()

    @given(MARKDOWN_ISH)
    @settings(max_examples=300)
    def test_offsets_monotonic_and_in_range(self, source: str) -> None:
        offsets = [e.offset for e in Scanner(source).run()]
        assert offsets == sorted(offsets)
        assert all(0 <= offset <= len(source) for offset in offsets)

    @given(MARKDOWN_ISH)
    @settings(max_examples=300)
    def test_every_end_is_followed_by_begin(self, source: str) -> None:
        events = Scanner(source).run()
        for i, event in enumerate(events):
            if event.type is not EventType.BEGIN:
                assert i + 1 < len(events)
                assert events[i + 1].type is EventType.BEGIN

    @given(MARKDOWN_ISH)
    @settings(max_examples=300)
    def test_events_come_in_span_groups(self, source: str) -> None:
        """Each math span is [TEXT_END] BEGIN <math end> BEGIN."""
        types = [e.type for e in Scanner(source).run()]
        i = 0
        while i < len(types):
            if types[i] is EventType.TEXT_END:
                i += 1
            assert types[i] is EventType.BEGIN
            assert types[i + 1] in (EventType.INLINE_END, EventType.BLOCK_END)
            assert types[i + 2] is EventType.BEGIN
            i += 3

    @given(st.text(max_size=300).filter(lambda s: "$" not in s))
    @settings(max_examples=100)
    def test_no_delimiter_no_events(self, source: str) -> None:
        assert Scanner(source).run() == []


class TestTaskInvariants:
    """Properties of the projection onto render tasks."""

    @given(MARKDOWN_ISH)
    @settings(max_examples=300)
    def test_tasks_reconstruct_source(self, source: str) -> None:
        assert reconstruct(source, ExtraOpts()) == source

    @given(st.text(alphabet="\\()[]$`x \n", max_size=200))
    @settings(max_examples=300)
    def test_tasks_reconstruct_source_custom_delimiters(self, source: str) -> None:
        assert reconstruct(source, PAREN_OPTS) == source

    @given(MARKDOWN_ISH)
    @settings(max_examples=200)
    def test_tasks_are_contiguous(self, source: str) -> None:
        """Text tasks are non-empty; no two text tasks are adjacent."""
        tasks = get_render_tasks(source, ExtraOpts())
        for prev, task in zip(tasks, tasks[1:]):
            assert not (prev.kind is TaskKind.TEXT and task.kind is TaskKind.TEXT)
        for task in tasks:
            if task.kind is TaskKind.TEXT:
                assert task.content
