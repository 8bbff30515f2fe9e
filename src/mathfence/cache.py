"""Content-addressed cache of rendered math fragments.

Books repeat formulas: the same ``$x$`` or ``$\\mathbb{R}^n$`` shows up in
many chapters. The cache maps (display mode, source hash) to rendered
markup so each distinct formula is rendered once per build.

A cache lives for one book build and is passed explicitly to whatever
renders spans; there is no module-level cache.

Thread Safety:
FragmentCache guards its dict with a lock; chapter workers share one
instance.

Example:
    >>> cache = FragmentCache()
    >>> cache.get("x", display=False) is None
    True
    >>> cache.put("x", "<math>...</math>", display=False)
    >>> cache.get("x", display=False)
    '<math>...</math>'
"""

from __future__ import annotations

import threading
from typing import Protocol

from mathfence.utils.hashing import hash_str


class RenderCache(Protocol):
    """Protocol for rendered fragment caches."""

    def get(self, source: str, *, display: bool) -> str | None:
        """Return cached markup if present, else None."""
        ...

    def put(self, source: str, markup: str, *, display: bool) -> None:
        """Store rendered markup."""
        ...


class FragmentCache:
    """In-memory, lock-protected fragment cache."""

    __slots__ = ("_data", "_lock", "hits", "misses")

    def __init__(self) -> None:
        self._data: dict[tuple[bool, str], str] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(source: str, display: bool) -> tuple[bool, str]:
        return display, hash_str(source, truncate=32)

    def get(self, source: str, *, display: bool) -> str | None:
        key = self._key(source, display)
        with self._lock:
            markup = self._data.get(key)
            if markup is None:
                self.misses += 1
            else:
                self.hits += 1
            return markup

    def put(self, source: str, markup: str, *, display: bool) -> None:
        key = self._key(source, display)
        with self._lock:
            self._data[key] = markup

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


__all__ = ["FragmentCache", "RenderCache"]
