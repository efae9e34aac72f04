"""
Hex token helpers for the foreign-call wire format.

Inputs arrive as one base-16 text token per byte ("ff", "0A", "7"), outputs
leave as two-character lowercase tokens ("05", "41").
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Union

from .errors import MalformedInput

# Optional 0x prefix, then at least one hex digit.
_HEX_TOKEN = re.compile(r"(?:0[xX])?[0-9a-fA-F]+")

BYTE_MAX = 0xFF


def decode_token(token: Any, index: int = 0) -> int:
    """
    Parse a single base-16 token into a byte value.

    Integers are rendered in decimal first and then read as base-16, which is
    how the host's own parser treats numeric JSON values.
    """
    if isinstance(token, bool):
        raise MalformedInput(token, index, "not a hex string")
    if isinstance(token, int):
        text = str(token)
    elif isinstance(token, str):
        text = token.strip()
    else:
        raise MalformedInput(token, index, "not a hex string")

    if not _HEX_TOKEN.fullmatch(text):
        raise MalformedInput(token, index)

    value = int(text, 16)
    if value > BYTE_MAX:
        raise MalformedInput(token, index, "outside the byte range 0..255")
    return value


def decode_tokens(tokens: Iterable[Any]) -> bytes:
    """Decode an ordered group of hex tokens into bytes (same length, same order)."""
    return bytes(decode_token(tok, i) for i, tok in enumerate(tokens))


def encode_bytes(data: Union[bytes, bytearray, memoryview]) -> List[str]:
    """Bytes → list of two-character lowercase hex tokens."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("encode_bytes expects bytes-like")
    return [f"{b:02x}" for b in bytes(data)]


def encode_text(text: str) -> List[str]:
    """UTF-8 encode `text` and return one hex token per byte."""
    return encode_bytes(text.encode("utf-8"))


__all__ = ["BYTE_MAX", "decode_token", "decode_tokens", "encode_bytes", "encode_text"]
