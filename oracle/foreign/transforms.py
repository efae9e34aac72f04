"""
The closed set of byte → text transformations the oracle can run.

Alphabet (standard vs URL-safe) and padding (kept vs stripped) are independent
axes; the four members of `Transformation` cover every combination.
"""

from __future__ import annotations

import base64
from enum import Enum
from typing import Callable, Dict, List

from .errors import UnknownFunction

_PAD = "="


def base64_standard(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_standard_no_pad(data: bytes) -> str:
    return base64_standard(data).rstrip(_PAD)


def base64_url_safe(data: bytes) -> str:
    return base64_url_safe_with_pad(data).rstrip(_PAD)


def base64_url_safe_with_pad(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii")


class Transformation(str, Enum):
    BASE64_STANDARD = "base64_encode_standard"
    BASE64_STANDARD_NO_PAD = "base64_encode_standard_no_pad"
    BASE64_URL_SAFE = "base64_encode_url_safe"
    BASE64_URL_SAFE_WITH_PAD = "base64_encode_url_safe_with_pad"

    @classmethod
    def from_name(cls, name: object) -> "Transformation":
        """Exact, case-sensitive lookup. Raises UnknownFunction for anything else."""
        if isinstance(name, str):
            for member in cls:
                if member.value == name:
                    return member
        raise UnknownFunction(name)

    @classmethod
    def names(cls) -> List[str]:
        return [m.value for m in cls]

    def apply(self, data: bytes) -> str:
        return _ENCODERS[self](data)


_ENCODERS: Dict[Transformation, Callable[[bytes], str]] = {
    Transformation.BASE64_STANDARD: base64_standard,
    Transformation.BASE64_STANDARD_NO_PAD: base64_standard_no_pad,
    Transformation.BASE64_URL_SAFE: base64_url_safe,
    Transformation.BASE64_URL_SAFE_WITH_PAD: base64_url_safe_with_pad,
}

assert set(_ENCODERS) == set(Transformation)


__all__ = [
    "Transformation",
    "base64_standard",
    "base64_standard_no_pad",
    "base64_url_safe",
    "base64_url_safe_with_pad",
]
