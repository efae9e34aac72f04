from __future__ import annotations

import typing as t

from oracle.foreign import Transformation
from oracle.methods import list_methods, method


@method("rpc.listMethods")
def rpc_list_methods() -> t.List[str]:
    """Return the list of registered method names (for debugging/clients)."""
    return list_methods()


@method("rpc.listFunctions")
def rpc_list_functions() -> t.List[str]:
    """Return the foreign functions accepted by resolve_foreign_call."""
    return Transformation.names()
