"""Math delimiter scanner for mathfence.

scanner/
├── __init__.py          # Re-exports Scanner, scan
├── core.py              # Scanner class (mixin composition + dispatch)
├── codespan.py          # Backtick code span skipping
└── math.py              # Math span recognition and escape counting

Usage:
    >>> from mathfence.scanner import Scanner
    >>> for event in Scanner("Let $x$ be").scan():
    ...     print(event)
Event(TEXT_END, 4)
Event(BEGIN, 5)
Event(INLINE_END, 6)
Event(BEGIN, 7)

"""

from mathfence.scanner.core import Scanner, scan

__all__ = ["Scanner", "scan"]
