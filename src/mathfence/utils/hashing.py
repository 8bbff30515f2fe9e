"""Hashing utilities for mathfence cache keys.

Example:
    >>> from mathfence.utils.hashing import hash_str
    >>> hash_str("hello world", truncate=16)
    'b94d27b9934d3e08'
"""

import hashlib


def hash_str(
    content: str,
    truncate: int | None = None,
) -> str:
    """SHA-256 hex digest of string content.

    Args:
        content: String content to hash
        truncate: Truncate result to N characters (None = full hash)

    Returns:
        Hex digest of hash, optionally truncated
    """
    digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
    return digest[:truncate] if truncate is not None else digest
