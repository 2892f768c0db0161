import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'cachefile' without an install.
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from helpers.cache_utils import reset_cachefile_caches  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_cachefile_env(tmp_path_factory, monkeypatch):
    """Point CACHEFILE_HOME at an empty directory and drop CACHEFILE_* overrides.

    Config caches are cleared before and after each test so no state leaks
    between tests.
    """
    for key in list(os.environ):
        if key.startswith("CACHEFILE_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path_factory.mktemp("cachefile-home")
    monkeypatch.setenv("CACHEFILE_HOME", str(home))
    reset_cachefile_caches()
    yield home
    reset_cachefile_caches()


@pytest.fixture
def cachefile_home(isolated_cachefile_env) -> Path:
    """The per-test CACHEFILE_HOME directory."""
    return isolated_cachefile_env


@pytest.fixture
def user_config(cachefile_home):
    """Write YAML into ``<home>/config/<name>`` and return its path."""

    def _write(text: str, name: str = "local.yaml") -> Path:
        cfg_dir = cachefile_home / "config"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        path = cfg_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write

