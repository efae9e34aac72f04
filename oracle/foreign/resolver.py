"""
Foreign-call resolver.

Pipeline for one call, failing fast on the first violation:

    validate_params(params)      -> ForeignCallParams      (InvalidRequest)
    decode_tokens(inputs[0])     -> bytes                  (MalformedInput)
    Transformation.from_name()   -> Transformation         (UnknownFunction)
    transformation.apply(bytes)  -> str
    encode_text(str)             -> ["41", "41", ...]

`resolve` is a pure function of (name, bytes) and can be exercised without any
transport. `resolve_foreign_call` adds the wire-shape handling around it.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence

from pydantic import ValidationError

from oracle.models import ForeignCallParams, ForeignCallResult

from .errors import InvalidRequest
from .hexcodec import decode_tokens, encode_text
from .transforms import Transformation

METHOD_NAME = "resolve_foreign_call"


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ())) or "params[0]"
    return f"{loc}: {first.get('msg', 'invalid value')}"


def validate_params(params: Sequence[Any]) -> ForeignCallParams:
    """Check the positional params shape and return the first call object."""
    if not params or not isinstance(params[0], Mapping):
        raise InvalidRequest()
    try:
        return ForeignCallParams.model_validate(dict(params[0]))
    except ValidationError as exc:
        raise InvalidRequest(f"Invalid foreign call parameters: {_describe(exc)}") from exc


def resolve(function: str, data: bytes) -> str:
    """Run the named transformation over `data`."""
    return Transformation.from_name(function).apply(data)


def resolve_foreign_call(params: Sequence[Any]) -> Dict[str, Any]:
    """
    Resolve one call from raw positional params.
    Returns {"values": [[hex, ...]]}.
    """
    call = validate_params(params)
    data = decode_tokens(call.first_group)
    text = resolve(call.function, data)
    return ForeignCallResult(values=[encode_text(text)]).model_dump()


__all__ = ["METHOD_NAME", "validate_params", "resolve", "resolve_foreign_call"]
