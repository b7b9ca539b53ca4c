"""Byte-order-mark detection and round-trip text encoding."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_SINGLE_BYTE_ENCODING: Final[str] = "cp1252"


@dataclass(frozen=True)
class TextEncoding:
    """A codec plus the byte-order mark written ahead of the payload."""

    codec: str
    bom: bytes = b""
    errors: str = "strict"

    @property
    def label(self) -> str:
        return f"{self.codec}+bom" if self.bom else self.codec

    def decode(self, payload: bytes) -> str:
        if self.bom and payload.startswith(self.bom):
            payload = payload[len(self.bom) :]
        return payload.decode(self.codec, self.errors)

    def encode(self, text: str) -> bytes:
        return self.bom + text.encode(self.codec, self.errors)


UTF16_BE: Final[TextEncoding] = TextEncoding("utf-16-be", codecs.BOM_UTF16_BE)
UTF16_LE: Final[TextEncoding] = TextEncoding("utf-16-le", codecs.BOM_UTF16_LE)
UTF8_BOM: Final[TextEncoding] = TextEncoding("utf-8", codecs.BOM_UTF8, "surrogateescape")

BOM_ENCODINGS: Final[tuple[TextEncoding, ...]] = (UTF16_BE, UTF16_LE, UTF8_BOM)


def single_byte(codec: str = DEFAULT_SINGLE_BYTE_ENCODING) -> TextEncoding:
    """Return a BOM-less encoding that round-trips undecodable bytes."""

    codecs.lookup(codec)
    return TextEncoding(codec, b"", "surrogateescape")


def sniff_encoding(head: bytes, default: str = DEFAULT_SINGLE_BYTE_ENCODING) -> TextEncoding:
    for candidate in BOM_ENCODINGS:
        if head.startswith(candidate.bom):
            return candidate
    return single_byte(default)


def detect_encoding(path: Path, default: str = DEFAULT_SINGLE_BYTE_ENCODING) -> TextEncoding:
    """Inspect the leading bytes of ``path`` for a byte-order mark.

    Read failures are treated as "no mark found" and yield the default
    single-byte encoding.
    """

    try:
        with path.open("rb") as handle:
            head = handle.read(4)
    except OSError:
        return single_byte(default)
    return sniff_encoding(head, default)


__all__ = [
    "DEFAULT_SINGLE_BYTE_ENCODING",
    "TextEncoding",
    "UTF16_BE",
    "UTF16_LE",
    "UTF8_BOM",
    "BOM_ENCODINGS",
    "detect_encoding",
    "single_byte",
    "sniff_encoding",
]
