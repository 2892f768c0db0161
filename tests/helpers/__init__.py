"""Test helper modules for the cachefile test suite.

- cache_utils: cache reset utilities for test isolation
- markers: platform skip markers
"""
from __future__ import annotations

from helpers.cache_utils import reset_cachefile_caches

__all__ = ["reset_cachefile_caches"]
