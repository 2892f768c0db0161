"""Platform skip markers shared across test modules."""
from __future__ import annotations

import os

import pytest

RUNNING_AS_ROOT = hasattr(os, "geteuid") and os.geteuid() == 0

requires_posix_permissions = pytest.mark.skipif(
    os.name != "posix" or RUNNING_AS_ROOT,
    reason="needs POSIX permission checks (not enforced for root)",
)

requires_hardlinks = pytest.mark.skipif(not hasattr(os, "link"), reason="platform has no hard links")

requires_posix = pytest.mark.skipif(os.name != "posix", reason="POSIX-only behavior")
