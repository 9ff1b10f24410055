"""
base32.py — RFC 4648 Base32 codec used for secret keys.

- encode(): bytes -> uppercase Base32, never padded.
- decode(): case-insensitive, tolerates trailing '=' padding, rejects every
  other character outside the alphabet.

Unlike base64.b32decode this decoder does not require the input length to be
a multiple of 8: a trailing group shorter than 8 bits is an incomplete byte
and is dropped, never zero-extended into an extra byte.

Case folding is ASCII only: str.upper() would turn 'ß' into 'SS' or the
Kelvin sign into 'K'.
"""

import re
import string

from .errors import InvalidEncoding

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_LOOKUP = {char: value for value, char in enumerate(ALPHABET)}
_BASE32_RE = re.compile(r"^[A-Z2-7]+=*$", re.IGNORECASE | re.ASCII)
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def encode(data: bytes) -> str:
    """
    Encode bytes as Base32 without padding.

    Bits are accumulated 8 at a time and emitted 5 at a time, MSB first. A final
    group of fewer than 5 bits is shifted left so its low bits are zero.
    For example encode(b"12345678901234567890") gives
    "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ".
    """
    value = 0
    bits = 0
    out = []
    for byte in data:
        value = ((value << 8) | byte) & 0xFFFF
        bits += 8
        while bits >= 5:
            out.append(ALPHABET[(value >> (bits - 5)) & 0x1F])
            bits -= 5
    if bits:
        out.append(ALPHABET[(value << (5 - bits)) & 0x1F])
    return "".join(out)


def decode(text: str) -> bytes:
    """
    Decode a Base32 string into bytes.

    Raises:
        InvalidEncoding: a character outside the alphabet, including '=' that
            is not trailing padding and any non-ASCII character
    """
    stripped = text.rstrip("=").translate(_ASCII_UPPER)
    value = 0
    bits = 0
    out = bytearray()
    for position, char in enumerate(stripped):
        try:
            value = ((value << 5) | _LOOKUP[char]) & 0xFFFF
        except KeyError:
            raise InvalidEncoding(
                f"Invalid Base32 character {char!r} at position {position}"
            ) from None
        bits += 5
        if bits >= 8:
            out.append((value >> (bits - 8)) & 0xFF)
            bits -= 8
    # leftover bits (< 8) are an incomplete byte: dropped
    return bytes(out)


def is_base32(text: str) -> bool:
    """True if text is a non-empty Base32 string with optional trailing padding."""
    return bool(text) and _BASE32_RE.match(text) is not None


def normalize(text: str) -> str:
    """Canonical storage form: uppercase, no padding."""
    return text.strip().rstrip("=").translate(_ASCII_UPPER)
