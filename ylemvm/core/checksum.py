"""Checksum helpers: hex codec and SHA-256 verification of downloads.

Catalog checksums arrive as hex strings that may carry a ``0x`` prefix;
they are always written back without one.
"""

from __future__ import annotations

import hashlib
import hmac
import re

from ylemvm.errors import ChecksumMismatchError

_HEX_PREFIX = "0x"
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


def decode_hex(text: str) -> bytes:
    """Decode a hex checksum, stripping any leading ``0x`` prefixes.

    Published lists contain doubled prefixes (``0x0x...``), so every
    leading occurrence is removed. Raises ``ValueError`` on invalid hex,
    including embedded whitespace.
    """
    while text.startswith(_HEX_PREFIX):
        text = text[len(_HEX_PREFIX):]
    if not _HEX_DIGITS.fullmatch(text):
        raise ValueError(f"Invalid hex checksum: {text!r}")
    return bytes.fromhex(text)


def encode_hex(data: bytes) -> str:
    """Lowercase hex without a prefix."""
    return bytes(data).hex()


def sha256_digest(data: bytes) -> bytes:
    """Return the raw SHA-256 digest of ``data``."""
    return hashlib.sha256(data).digest()


def verify_checksum(data: bytes, expected: bytes) -> None:
    """Check downloaded bytes against a catalog checksum.

    Raises ChecksumMismatchError if the SHA-256 of ``data`` differs.
    """
    actual = sha256_digest(data)
    if not hmac.compare_digest(actual, bytes(expected)):
        raise ChecksumMismatchError(encode_hex(expected), encode_hex(actual))
