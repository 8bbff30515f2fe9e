"""Event and EventType definitions for the mathfence scanner.

The scanner produces a stream of Event objects that the task projection
consumes. Each Event marks one span boundary at an offset in the source.

A well-formed stream looks like::

    TEXT_END(a) BEGIN(b) INLINE_END(c) BEGIN(d) ...

The first text span implicitly begins at offset 0. Every INLINE_END or
BLOCK_END is immediately followed by a BEGIN just past the closing
delimiter. The stream may end inside a text span; the consumer owns the
trailing text.

Thread Safety:
Event is frozen (immutable) and safe to share across threads.
EventType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class EventType(Enum):
    """Span boundary kinds produced by the scanner."""

    BEGIN = auto()  # next span starts here
    TEXT_END = auto()  # [last BEGIN, offset) is text
    INLINE_END = auto()  # [last BEGIN, offset) is inline math content
    BLOCK_END = auto()  # [last BEGIN, offset) is display math content


@dataclass(frozen=True, slots=True)
class Event:
    """A span boundary produced by the scanner.

    Attributes:
        type: The boundary kind
        offset: Index into the source string

    """

    type: EventType
    offset: int

    @property
    def is_math_end(self) -> bool:
        """True for INLINE_END and BLOCK_END."""
        return self.type is EventType.INLINE_END or self.type is EventType.BLOCK_END

    def __repr__(self) -> str:
        return f"Event({self.type.name}, {self.offset})"


__all__ = ["Event", "EventType"]
