"""Math span scanner mixin."""

from __future__ import annotations

from collections import deque

from mathfence.delimiter import Delimiter
from mathfence.events import Event, EventType


class MathScannerMixin:
    """Mixin providing math span recognition.

    A math span opens at a left delimiter and closes at the first right
    delimiter preceded by an even number of backslashes. The span's
    events are committed together once the closer is found, so a span
    without a closer contributes no events at all.

    """

    # These will be set by the Scanner class
    _source: str
    _source_len: int
    _pos: int
    _pending: deque[Event]

    def _is_escaped(self, pos: int, floor: int) -> bool:
        """Whether the character at ``pos`` is escaped by backslashes.

        Counts the run of backslashes immediately before ``pos``, never
        looking back past ``floor``. An odd count means the last backslash
        escapes the character.
        """
        source = self._source
        count = 0
        pos -= 1
        while pos >= floor and source[pos] == "\\":
            count += 1
            pos -= 1
        return count % 2 == 1

    def _find_closing(self, delimiter: Delimiter, content_start: int) -> int:
        """Offset of the first unescaped right delimiter, or -1."""
        source = self._source
        right = delimiter.right
        search = content_start

        while True:
            found = source.find(right, search)
            if found == -1:
                return -1
            if not self._is_escaped(found, content_start):
                return found
            search = found + len(right)

    def _process_delimit(self, delimiter: Delimiter, end_type: EventType) -> bool:
        """Consume a math span whose left delimiter is at the cursor.

        Args:
            delimiter: The delimiter that matched at the cursor
            end_type: INLINE_END or BLOCK_END

        Returns:
            True if the span closed, False if no closer exists (the cursor
            is moved to the end and the scan stops).
        """
        start = self._pos
        content_start = start + len(delimiter.left)

        close = self._find_closing(delimiter, content_start)
        if close == -1:
            self._pos = self._source_len
            return False

        pending = self._pending
        if start > 0:
            pending.append(Event(EventType.TEXT_END, start))
        pending.append(Event(EventType.BEGIN, content_start))
        pending.append(Event(end_type, close))
        self._pos = close + len(delimiter.right)
        pending.append(Event(EventType.BEGIN, self._pos))
        return True
