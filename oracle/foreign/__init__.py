"""
Foreign-call resolution: hex decoding, the closed transformation set, and the
resolver that ties them together. Nothing in here knows about HTTP.
"""

from .errors import (ForeignCallError, InvalidRequest, MalformedInput,
                     UnknownFunction)
from .hexcodec import decode_token, decode_tokens, encode_bytes, encode_text
from .resolver import (METHOD_NAME, resolve, resolve_foreign_call,
                       validate_params)
from .transforms import Transformation

__all__ = [
    "ForeignCallError",
    "InvalidRequest",
    "MalformedInput",
    "UnknownFunction",
    "Transformation",
    "decode_token",
    "decode_tokens",
    "encode_bytes",
    "encode_text",
    "METHOD_NAME",
    "resolve",
    "resolve_foreign_call",
    "validate_params",
]
