"""Code span scanner mixin.

Skips inline code and fenced code so that math delimiters inside them are
never recognized. Only backtick fences are tracked; a closing run must have
exactly the opening run's length.
"""

from __future__ import annotations


class CodeSpanScannerMixin:
    """Mixin providing backtick code span skipping.

    Backslashes do not escape closing backticks: inside a code span a
    backslash is a literal character (``\\` and `` ` `` closes after
    the backslash).

    """

    # These will be set by the Scanner class
    _source: str
    _source_len: int
    _pos: int

    def _count_backticks(self, pos: int) -> int:
        """Length of the backtick run starting at ``pos``."""
        source = self._source
        source_len = self._source_len
        end = pos
        while end < source_len and source[end] == "`":
            end += 1
        return end - pos

    def _process_backtick(self) -> bool:
        """Skip a full code span starting at the cursor.

        The cursor must sit on the first backtick of the opening run.
        Overlong closing runs are skipped whole and the search resumes
        after them.

        Returns:
            True if the span closed and scanning continues, False if no
            matching run exists (the rest of the document is code, and the
            cursor is moved to the end).
        """
        source = self._source
        count = self._count_backticks(self._pos)
        fence = "`" * count
        search = self._pos + count

        while True:
            found = source.find(fence, search)
            if found == -1:
                self._pos = self._source_len
                return False

            close_end = found + count
            extra = self._count_backticks(close_end)
            if extra:
                # Run is longer than the opener; it cannot close this span
                search = close_end + extra
                continue

            self._pos = close_end
            return True
