from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cachefile.config import (
    ConfigManager,
    IOConfig,
    LoggingConfig,
    TextConfig,
    clear_all_caches,
    get_cached_config,
    get_user_dir,
    is_cached,
)
from cachefile.config.merge import deep_merge
from cachefile.config.validation import validate_payload_safe
from cachefile.errors import ConfigError, SchemaValidationError


def test_bundled_defaults() -> None:
    cfg = ConfigManager().load_config()

    assert cfg["io"] == {"read_buffer_size": 65536, "fsync": True, "tmp_infix": "tmp"}
    assert cfg["text"]["encoding"] == "utf-8"
    assert cfg["text"]["errors"] == "surrogateescape"
    assert cfg["text"]["transcode_utf16le_bom"] is True
    assert cfg["logging"] == {"level": "WARNING", "path": ""}


def test_user_dir_follows_environment(cachefile_home: Path) -> None:
    assert get_user_dir() == cachefile_home.resolve()


def test_user_config_overrides_defaults(user_config) -> None:
    user_config("io:\n  read_buffer_size: 4096\n")

    cfg = get_cached_config()

    assert cfg["io"]["read_buffer_size"] == 4096
    assert cfg["io"]["fsync"] is True


def test_user_config_files_merge_alphabetically(user_config) -> None:
    user_config("io:\n  tmp_infix: first\n", name="10-a.yaml")
    user_config("io:\n  tmp_infix: second\n", name="20-b.yml")

    assert IOConfig().tmp_infix == "second"


def test_env_overrides_win_over_files(user_config, monkeypatch: pytest.MonkeyPatch) -> None:
    user_config("io:\n  read_buffer_size: 4096\n")
    monkeypatch.setenv("CACHEFILE_io__read_buffer_size", "8192")
    monkeypatch.setenv("CACHEFILE_io__fsync", "false")

    cfg = IOConfig()

    assert cfg.read_buffer_size == 8192
    assert cfg.fsync is False
    assert cfg.get_all_settings() == {
        "read_buffer_size": 8192,
        "fsync": False,
        "tmp_infix": "tmp",
    }


def test_cache_notices_env_changes(monkeypatch: pytest.MonkeyPatch) -> None:
    assert IOConfig().read_buffer_size == 65536
    monkeypatch.setenv("CACHEFILE_io__read_buffer_size", "512")
    assert IOConfig().read_buffer_size == 512


def test_cache_returns_same_instance_until_cleared() -> None:
    first = get_cached_config()
    assert get_cached_config() is first
    assert is_cached()

    clear_all_caches()

    assert not is_cached()
    assert get_cached_config() is not first


def test_malformed_env_key_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHEFILE_iobuffer", "1")

    with pytest.raises(ConfigError):
        get_cached_config()


def test_malformed_env_key_ignored_without_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHEFILE_iobuffer", "1")

    cfg = get_cached_config(validate=False)

    assert "iobuffer" not in cfg


def test_schema_violation_raises(user_config) -> None:
    user_config("io:\n  read_buffer_size: 0\n")

    with pytest.raises(SchemaValidationError) as excinfo:
        get_cached_config()

    assert "io.read_buffer_size" in str(excinfo.value)


def test_invalid_yaml_raises(user_config) -> None:
    user_config("io: [unclosed\n")

    with pytest.raises(ConfigError):
        get_cached_config()


def test_non_mapping_yaml_raises(user_config) -> None:
    user_config("- just\n- a list\n")

    with pytest.raises(ConfigError):
        get_cached_config()


def test_fallback_to_defaults_on_malformed_env(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("CACHEFILE_io__read_buffer_size", "512")
    monkeypatch.setenv("CACHEFILE_DEBUG", "1")

    with caplog.at_level(logging.WARNING, logger="cachefile"):
        cfg = IOConfig(fallback_to_defaults=True)
        assert IOConfig(fallback_to_defaults=True).read_buffer_size == 65536

    assert cfg.read_buffer_size == 65536
    warnings = [r for r in caplog.records if "using bundled defaults" in r.getMessage()]
    assert len(warnings) == 1
    with pytest.raises(ConfigError):
        IOConfig()


def test_fallback_to_defaults_on_schema_violation(user_config) -> None:
    user_config("io:\n  read_buffer_size: 0\n")

    assert get_cached_config(fallback_to_defaults=True)["io"]["read_buffer_size"] == 65536
    with pytest.raises(SchemaValidationError):
        get_cached_config()


def test_text_and_logging_accessors(user_config, cachefile_home: Path) -> None:
    user_config("text:\n  encoding: latin-1\nlogging:\n  level: DEBUG\n  path: logs/cachefile.log\n")

    assert TextConfig().encoding == "latin-1"
    logging_cfg = LoggingConfig()
    assert logging_cfg.level == "DEBUG"
    assert logging_cfg.path == cachefile_home.resolve() / "logs" / "cachefile.log"


def test_logging_path_empty_means_disabled() -> None:
    assert LoggingConfig().path is None


def test_validate_payload_safe_lists_all_errors() -> None:
    errors = validate_payload_safe({"io": {"read_buffer_size": "big"}}, "config")

    assert any(e.startswith("io:") or e.startswith("io.") for e in errors)
    assert any("text" in e for e in errors)


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"a": {"b": 1, "c": [1, 2]}, "d": 1}
    override = {"a": {"c": [3]}, "e": 2}

    merged = deep_merge(base, override)

    assert merged == {"a": {"b": 1, "c": [3]}, "d": 1, "e": 2}
    assert base == {"a": {"b": 1, "c": [1, 2]}, "d": 1}
