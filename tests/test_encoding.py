"""Tests for byte-order-mark sniffing and encoding round trips."""

from __future__ import annotations

import codecs
from pathlib import Path

import pytest

from src.metadata.encoding import (
    UTF8_BOM,
    UTF16_BE,
    UTF16_LE,
    detect_encoding,
    single_byte,
    sniff_encoding,
)


@pytest.mark.parametrize(
    ("head", "expected"),
    [
        (codecs.BOM_UTF16_BE + b"\x00[", UTF16_BE),
        (codecs.BOM_UTF16_LE + b"[\x00", UTF16_LE),
        (codecs.BOM_UTF8 + b"us", UTF8_BOM),
    ],
)
def test_sniff_encoding_detects_byte_order_marks(head: bytes, expected) -> None:
    assert sniff_encoding(head) == expected


def test_sniff_encoding_defaults_to_single_byte() -> None:
    encoding = sniff_encoding(b"usin")
    assert encoding.codec == "cp1252"
    assert encoding.bom == b""
    assert sniff_encoding(b"", "latin-1").codec == "latin-1"


def test_detect_encoding_swallows_read_errors(tmp_path: Path) -> None:
    encoding = detect_encoding(tmp_path / "missing.cs")
    assert encoding.codec == "cp1252"
    assert detect_encoding(tmp_path).codec == "cp1252"


def test_bom_is_stripped_on_decode_and_restored_on_encode() -> None:
    payload = codecs.BOM_UTF16_LE + "x = 1\r\n".encode("utf-16-le")
    text = UTF16_LE.decode(payload)
    assert text == "x = 1\r\n"
    assert UTF16_LE.encode(text) == payload


def test_single_byte_round_trips_undefined_bytes() -> None:
    raw = bytes(range(256))
    encoding = single_byte("cp1252")
    assert encoding.encode(encoding.decode(raw)) == raw


def test_single_byte_rejects_unknown_codec() -> None:
    with pytest.raises(LookupError):
        single_byte("no-such-codec")


def test_labels_distinguish_bom_variants() -> None:
    assert UTF8_BOM.label == "utf-8+bom"
    assert single_byte().label == "cp1252"
