"""Single-pass math delimiter scanner.

Classifies a Markdown source into text, inline math and display math spans
without parsing Markdown. Code spans and fenced code are skipped whole, and
a backslash escapes the character after it.

One cursor, one forward pass. The only look-behind is the backslash count
before a closing delimiter candidate.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; delimiters are immutable and may be shared.

"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from mathfence.delimiter import DEFAULT_BLOCK_DELIMITER, DEFAULT_INLINE_DELIMITER, Delimiter
from mathfence.events import Event, EventType
from mathfence.scanner.codespan import CodeSpanScannerMixin
from mathfence.scanner.math import MathScannerMixin


class Scanner(
    CodeSpanScannerMixin,
    MathScannerMixin,
):
    """Scanner producing span boundary events.

    Per character at the cursor:
    1. Start of the block delimiter -> math span (block is tried first,
       so ``$$`` is never read as an empty ``$`` span)
    2. Start of the inline delimiter -> math span
    3. ``\\`` -> skip it and the next character
    4. Backtick -> skip the code span
    5. Anything else -> text

    Usage:
            >>> scanner = Scanner("a $x$ b")
            >>> list(scanner.scan())
            [Event(TEXT_END, 2), Event(BEGIN, 3), Event(INLINE_END, 4), Event(BEGIN, 5)]

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_pos",
        "_pending",  # Events committed but not yet yielded
        "_block_delimiter",
        "_inline_delimiter",
        "_triggers",  # Characters that may start something other than text
    )

    def __init__(
        self,
        source: str,
        block_delimiter: Delimiter = DEFAULT_BLOCK_DELIMITER,
        inline_delimiter: Delimiter = DEFAULT_INLINE_DELIMITER,
    ) -> None:
        """Initialize scanner with source text.

        Args:
            source: Markdown source text
            block_delimiter: Delimiter of display math spans
            inline_delimiter: Delimiter of inline math spans
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._pending: deque[Event] = deque()
        self._block_delimiter = block_delimiter
        self._inline_delimiter = inline_delimiter
        self._triggers = frozenset(
            {block_delimiter.first, inline_delimiter.first, "\\", "`"}
        )

    def scan(self) -> Iterator[Event]:
        """Scan source into an event stream.

        Yields:
            Event objects one at a time

        Complexity: O(n) where n = len(source), plus the backslash
        look-behind at closing delimiter candidates.
        """
        source = self._source
        source_len = self._source_len
        triggers = self._triggers
        pending = self._pending

        while self._pos < source_len:
            if source[self._pos] not in triggers:
                self._pos += 1
                continue
            more = self._process_char()
            while pending:
                yield pending.popleft()
            if not more:
                break

    def run(self) -> list[Event]:
        """Scan the whole source eagerly."""
        return list(self.scan())

    def _process_char(self) -> bool:
        """Dispatch on the trigger character at the cursor.

        Returns:
            False when the scan must stop early (unterminated code span or
            math span), True otherwise.
        """
        source = self._source
        pos = self._pos
        char = source[pos]
        block = self._block_delimiter
        inline = self._inline_delimiter

        if char == block.first and block.match_left(source, pos):
            return self._process_delimit(block, EventType.BLOCK_END)
        if char == inline.first and inline.match_left(source, pos):
            return self._process_delimit(inline, EventType.INLINE_END)
        if char == "\\":
            self._pos = pos + 2
            return True
        if char == "`":
            return self._process_backtick()

        self._pos = pos + 1
        return True


def scan(
    source: str,
    block_delimiter: Delimiter = DEFAULT_BLOCK_DELIMITER,
    inline_delimiter: Delimiter = DEFAULT_INLINE_DELIMITER,
) -> Iterator[Event]:
    """Scan ``source`` with a fresh Scanner.

    Example:
        >>> [e.type.name for e in scan("$$x$$")]
        ['BEGIN', 'BLOCK_END', 'BEGIN']
    """
    return Scanner(source, block_delimiter, inline_delimiter).scan()
