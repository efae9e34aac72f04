from __future__ import annotations

import logging
import typing as t

from oracle.foreign import (METHOD_NAME, ForeignCallError, Transformation,
                            resolve_foreign_call)
from oracle.metrics import rpc_metrics
from oracle.methods import method

log = logging.getLogger("oracle.foreign")

_KNOWN = frozenset(Transformation.names())


def _function_label(params: t.Sequence[t.Any]) -> str:
    # Keep metric labels bounded: anything outside the closed set is "unknown".
    if params and isinstance(params[0], dict):
        name = params[0].get("function")
        if name in _KNOWN:
            return t.cast(str, name)
    return "unknown"


@method(METHOD_NAME)
def resolve_foreign_call_method(*params: t.Any) -> dict:
    """Resolve one foreign call; params[0] is {"function": ..., "inputs": [[hex, ...]]}."""
    label = _function_label(params)
    try:
        result = resolve_foreign_call(params)
    except ForeignCallError as exc:
        log.error("Error in foreign call: %s", exc)
        rpc_metrics.foreign_call(label, exc.kind)
        raise
    rpc_metrics.foreign_call(label, "ok")
    return result
