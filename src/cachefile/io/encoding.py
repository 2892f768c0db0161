"""Text decoding for file reads.

Some toolchains emit text as UTF-16LE with a byte-order mark; such content
is transcoded on read. Writes always use the configured encoding.
"""
from __future__ import annotations

import codecs
from typing import Optional

UTF16LE_BOM = codecs.BOM_UTF16_LE


def has_utf16le_bom(data: bytes) -> bool:
    return data[:2] == UTF16LE_BOM


def decode_text(
    data: bytes,
    *,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    transcode_bom: Optional[bool] = None,
) -> str:
    """Decode file content to text.

    Content starting with a UTF-16LE BOM is decoded as UTF-16LE with the BOM
    dropped (unless ``transcode_bom`` is False); malformed code units become
    U+FFFD. Anything else is decoded with ``encoding`` and ``errors``.
    Unset arguments come from the ``text`` config section.
    """
    if encoding is None or errors is None or transcode_bom is None:
        from cachefile.config import TextConfig

        cfg = TextConfig(fallback_to_defaults=True)
        encoding = cfg.encoding if encoding is None else encoding
        errors = cfg.errors if errors is None else errors
        transcode_bom = cfg.transcode_utf16le_bom if transcode_bom is None else transcode_bom

    if transcode_bom and has_utf16le_bom(data):
        return bytes(data[len(UTF16LE_BOM):]).decode("utf-16-le", "replace")
    return bytes(data).decode(encoding, errors)


def encode_text(text: str, *, encoding: Optional[str] = None, errors: Optional[str] = None) -> bytes:
    """Encode ``text`` with the configured encoding and error handler."""
    if encoding is None or errors is None:
        from cachefile.config import TextConfig

        cfg = TextConfig(fallback_to_defaults=True)
        encoding = cfg.encoding if encoding is None else encoding
        errors = cfg.errors if errors is None else errors
    return text.encode(encoding, errors)


__all__ = ["UTF16LE_BOM", "has_utf16le_bom", "decode_text", "encode_text"]
