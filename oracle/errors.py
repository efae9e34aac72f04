"""
JSON-RPC errors for the oracle.

This module provides:
- Canonical JSON-RPC 2.0 error codes (parse/invalid request/method not found/invalid params/internal).
- Exception classes that carry (code, message, data).
- Helpers to convert arbitrary exceptions → JSON-RPC error envelopes.

Foreign-call faults (see oracle.foreign.errors) have no code of their own: like
any other exception escaping a method they become -32603 "Internal error" with
the fault message as `data`.

Usage (from oracle/jsonrpc.py):
    from .errors import to_error, error_response

    try:
        result = spec.call(params)
        return {"jsonrpc": "2.0", "id": req_id, "result": result}
    except Exception as e:
        return error_response(req_id, to_error(e))
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Union


# ───────────────────────────────────────────────────────────────────────────────
# JSON-RPC 2.0 codes
# ───────────────────────────────────────────────────────────────────────────────

class JsonRpcCode(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# ───────────────────────────────────────────────────────────────────────────────
# Error dataclass & base exception
# ───────────────────────────────────────────────────────────────────────────────

@dataclass(eq=False)
class RpcError(Exception):
    code: int
    message: str
    data: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        err: Dict[str, Any] = {"code": int(self.code), "message": str(self.message)}
        if self.data is not None:
            err["data"] = _safe_jsonable(self.data)
        return err

    def __str__(self) -> str:  # pragma: no cover
        return f"[{self.code}] {self.message} ({self.data})"


class ParseError(RpcError):
    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(JsonRpcCode.PARSE_ERROR, "Parse error", detail)

class InvalidRequest(RpcError):
    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(JsonRpcCode.INVALID_REQUEST, "Invalid Request", detail)

class MethodNotFound(RpcError):
    def __init__(self, method: str) -> None:
        super().__init__(JsonRpcCode.METHOD_NOT_FOUND, "Method not found", {"method": method})

class InvalidParams(RpcError):
    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(JsonRpcCode.INVALID_PARAMS, "Invalid params", detail)

class InternalError(RpcError):
    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(JsonRpcCode.INTERNAL_ERROR, "Internal error", detail)


# ───────────────────────────────────────────────────────────────────────────────
# Helpers
# ───────────────────────────────────────────────────────────────────────────────

def error_response(req_id: Optional[Union[str, int, float]], err: RpcError) -> Dict[str, Any]:
    """
    Build a JSON-RPC error response dict.
    """
    return {"jsonrpc": "2.0", "id": req_id, "error": err.to_dict()}


def _safe_jsonable(obj: Any) -> Any:
    """
    Best-effort sanitizer: convert exotic objects to strings, ints, or dicts.
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).hex()
    if isinstance(obj, Mapping):
        return {str(k): _safe_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_safe_jsonable(x) for x in obj]
    return str(obj)


def to_error(exc: BaseException) -> RpcError:
    """
    Convert any Exception into a RpcError.
    - RpcError passes through.
    - Everything else (foreign-call faults included) becomes InternalError
      carrying the exception message as `data`.
    """
    if isinstance(exc, RpcError):
        return exc
    return InternalError(str(exc) or exc.__class__.__name__)


__all__ = [
    "RpcError",
    "JsonRpcCode",
    "ParseError",
    "InvalidRequest",
    "MethodNotFound",
    "InvalidParams",
    "InternalError",
    "error_response",
    "to_error",
]
