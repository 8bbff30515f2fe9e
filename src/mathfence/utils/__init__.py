"""Utility modules for mathfence.

Provides:
- hashing: hash_str for cache keys
- logger: get_logger, configure_logging
"""

from mathfence.utils.hashing import hash_str
from mathfence.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "hash_str",
]
