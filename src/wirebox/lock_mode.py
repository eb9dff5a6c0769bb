from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for cached value resolution.

    Pass one of these values as ``Container(lock_mode=...)``. The lock guards
    the "check cache, build, store" sequence of ``Container.get`` so that
    concurrent first calls for the same identifier build the value once.
    """

    THREAD = "thread"
    """Guard cached values with a per-identifier ``threading.Lock``."""

    NONE = "none"
    """Disable locking around cache reads/writes (single-threaded hosts)."""
