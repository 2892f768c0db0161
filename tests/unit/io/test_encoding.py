from __future__ import annotations

import pytest

from cachefile.io.encoding import UTF16LE_BOM, decode_text, encode_text, has_utf16le_bom


def test_has_utf16le_bom() -> None:
    assert has_utf16le_bom(b"\xff\xfeh\x00")
    assert not has_utf16le_bom(b"\xfe\xffh\x00")
    assert not has_utf16le_bom(b"\xff")
    assert not has_utf16le_bom(b"")


def test_decode_text_transcodes_utf16le_with_bom() -> None:
    raw = UTF16LE_BOM + "héllo wörld".encode("utf-16-le")
    assert decode_text(raw) == "héllo wörld"


def test_decode_text_leaves_bom_alone_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHEFILE_text__transcode_utf16le_bom", "false")
    raw = UTF16LE_BOM + "hi".encode("utf-16-le")

    assert decode_text(raw) == raw.decode("utf-8", "surrogateescape")


def test_decode_text_odd_trailing_byte_is_replaced() -> None:
    raw = UTF16LE_BOM + "ab".encode("utf-16-le") + b"x"
    assert decode_text(raw) == "ab\ufffd"


def test_decode_text_plain_utf8() -> None:
    assert decode_text("ünïcode".encode("utf-8")) == "ünïcode"


def test_undecodable_bytes_survive_round_trip() -> None:
    raw = b"ok \x80\xfe bytes"
    assert encode_text(decode_text(raw)) == raw


def test_explicit_arguments_override_config() -> None:
    assert decode_text(b"caf\xe9", encoding="latin-1", errors="strict", transcode_bom=True) == "café"
    assert encode_text("café", encoding="latin-1", errors="strict") == b"caf\xe9"
