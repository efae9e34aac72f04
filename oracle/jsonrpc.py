"""
Oracle JSON-RPC 2.0 dispatcher
================================

Features
--------
• JSON-RPC 2.0: single & batch, named & positional params, notifications.
• Structured error mapping (standard codes via oracle.errors).
• Sync or async method callables.
• Deterministic responses: {"jsonrpc":"2.0", "id":..., "result":...} or {"error":...}.

This module is framework-free; oracle/server.py feeds it parsed JSON bodies.
Any exception that is not already a JSON-RPC error (foreign-call faults
included) is answered with -32603 "Internal error" and the exception message
as `data`.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from oracle import methods
from oracle.errors import (InvalidParams, InvalidRequest, MethodNotFound,
                           RpcError, error_response, to_error)
from oracle.foreign import ForeignCallError
from oracle.metrics import rpc_metrics

log = logging.getLogger("oracle.jsonrpc")

Json = Dict[str, Any]
Params = Union[List[Any], Dict[str, Any]]

_NO_ID = object()  # sentinel for notification


# --------------------------------------------------------------------------------------
# Validation & binding
# --------------------------------------------------------------------------------------


def _validate_id(id_val: Any) -> Any:
    # Spec allows string, number, or null for id
    if id_val is None or (
        isinstance(id_val, (str, int, float)) and not isinstance(id_val, bool)
    ):
        return id_val
    raise InvalidRequest("id must be string, number, or null")


def _validate_request_obj(obj: Json) -> Tuple[str, Optional[Params], Any]:
    """
    Validate base request object; returns (method, params, id).
    Raises InvalidRequest on structural errors. Does NOT validate method existence.
    """
    if obj.get("jsonrpc") != "2.0":
        raise InvalidRequest("jsonrpc must be '2.0'")

    method = obj.get("method")
    if not isinstance(method, str) or not method:
        raise InvalidRequest("method must be a non-empty string")

    params: Optional[Params] = obj.get("params")
    if params is not None and not isinstance(params, (list, dict)):
        raise InvalidParams("params, if present, must be array or object")

    req_id = obj["id"] if "id" in obj else _NO_ID
    if req_id is not _NO_ID:
        _validate_id(req_id)
    return method, params, req_id


def _bind_call_args(fn: Any, params: Optional[Params]) -> inspect.BoundArguments:
    """Bind positional/named params to `fn`; arity mismatches become InvalidParams."""
    sig = inspect.signature(fn)
    try:
        if params is None:
            return sig.bind()
        if isinstance(params, list):
            return sig.bind(*params)
        return sig.bind(**params)
    except TypeError as e:
        raise InvalidParams(str(e)) from e


async def _maybe_await(x: Any) -> Any:
    if inspect.isawaitable(x):
        return await x
    return x


# --------------------------------------------------------------------------------------
# Core dispatch
# --------------------------------------------------------------------------------------


def _method_label(name: Any) -> str:
    # Unregistered names share one label to keep metric cardinality bounded.
    if isinstance(name, str) and name in methods.get_registry():
        return name
    return "unknown"


async def _call(method_name: str, params: Optional[Params]) -> Any:
    try:
        spec = methods.resolve(method_name)
    except KeyError:
        raise MethodNotFound(method_name) from None
    bound = _bind_call_args(spec.func, params)
    return await _maybe_await(spec.func(*bound.args, **bound.kwargs))


async def dispatch_one(obj: Json) -> Optional[Json]:
    """
    Dispatch a single JSON-RPC request object.
    Returns a response object or None (for notifications).
    """
    req_id: Any = obj.get("id", _NO_ID)
    method_name: Any = obj.get("method")
    obs = rpc_metrics.observe_jsonrpc(_method_label(method_name))
    try:
        method_name, params, req_id = _validate_request_obj(obj)
        result = await _call(method_name, params)
    except RpcError as exc:
        err = exc
    except ForeignCallError as exc:
        err = to_error(exc)
    except Exception as exc:
        log.exception("Unhandled error in JSON-RPC method %s", method_name)
        err = to_error(exc)
    else:
        obs.ok()
        if req_id is _NO_ID:
            return None
        return {"jsonrpc": "2.0", "id": req_id, "result": result}

    obs.error(str(int(err.code)))
    if req_id is _NO_ID:
        # Notifications never get a response, even on error
        log.debug("Error in notification %s: %s", method_name, err)
        return None
    try:
        _validate_id(req_id)
    except InvalidRequest:
        # An id that failed validation is not echoed back
        req_id = None
    return error_response(req_id, err)


async def dispatch(payload: Any) -> Union[Json, List[Json], None]:
    """
    Dispatch a parsed JSON payload (already json.loads'ed).
    Handles single objects and batches.
    """
    if isinstance(payload, list):
        if not payload:
            return error_response(None, InvalidRequest("empty batch"))

        results: List[Json] = []
        for obj in payload:
            if isinstance(obj, dict):
                r = await dispatch_one(obj)
            else:
                r = error_response(None, InvalidRequest("Request must be an object"))
            if r is not None:
                results.append(r)
        # A batch made only of notifications gets no response at all
        return results or None

    if isinstance(payload, dict):
        return await dispatch_one(payload)

    return error_response(None, InvalidRequest("payload must be object or array"))


__all__ = ["dispatch", "dispatch_one"]
