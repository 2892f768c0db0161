"""Disk usage estimation."""
from __future__ import annotations

BLOCK_SIZE = 4096


def likely_size_on_disk(size: int) -> int:
    """Return how much a file of ``size`` bytes likely occupies on disk.

    That is ``size`` rounded up to a multiple of :data:`BLOCK_SIZE`.
    """
    if size < 0:
        raise ValueError(f"size must not be negative (got {size})")
    return (size + BLOCK_SIZE - 1) & ~(BLOCK_SIZE - 1)


__all__ = ["BLOCK_SIZE", "likely_size_on_disk"]
