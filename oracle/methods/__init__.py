from __future__ import annotations

"""
oracle.methods
==============

A lightweight registry that binds JSON-RPC method names (e.g.
"resolve_foreign_call") to Python callables.

Design goals
------------
- Simple: a dict mapping {method_name: MethodSpec}.
- Lazy: importing this package does not load method modules until the
  registry is first read.
- Safe: duplicate registrations must opt-in with replace=True.

Typical method module usage
---------------------------
from . import method

@method("resolve_foreign_call")
def resolve_foreign_call(*params): ...

Dispatcher integration
----------------------
The JSON-RPC dispatcher (oracle/jsonrpc.py) calls `resolve(name)` and binds the
request params against `spec.func`.
"""

import importlib
import inspect
import threading
import typing as t
from dataclasses import dataclass


@dataclass(frozen=True)
class MethodSpec:
    """Metadata about a JSON-RPC method binding."""

    name: str
    func: t.Callable[..., t.Any]
    desc: str | None = None


# ---- Global registry --------------------------------------------------------

_REGISTRY: dict[str, MethodSpec] = {}
_LOADED = False
_LOCK = threading.RLock()

_BUILTIN_MODULES = (
    "oracle.methods.foreign_call",
    "oracle.methods.introspection",
)


def register(
    name: str,
    func: t.Callable[..., t.Any],
    *,
    desc: str | None = None,
    replace: bool = False,
) -> MethodSpec:
    """Register a method callable under a JSON-RPC name."""
    if not isinstance(name, str) or not name:
        raise ValueError(f"Method name must be a non-empty string, got {name!r}")

    with _LOCK:
        if name in _REGISTRY and not replace:
            raise KeyError(f"Method {name!r} is already registered")
        spec = MethodSpec(name=name, func=func, desc=desc or _func_desc(func))
        _REGISTRY[name] = spec
        return spec


def method(name: str, *, desc: str | None = None, replace: bool = False):
    """
    Decorator to register a function as a JSON-RPC method.

    Example:
        @method("resolve_foreign_call")
        def resolve_foreign_call(*params): ...
    """

    def _wrap(fn: t.Callable[..., t.Any]):
        register(name, fn, desc=desc, replace=replace)
        return fn

    return _wrap


def resolve(name: str) -> MethodSpec:
    ensure_loaded()
    with _LOCK:
        spec = _REGISTRY.get(name)
        if spec is None:
            raise KeyError(f"Unknown method: {name}")
        return spec


def get_registry() -> dict[str, MethodSpec]:
    """Return a snapshot of the registry (after ensuring built-ins are loaded)."""
    ensure_loaded()
    with _LOCK:
        return dict(_REGISTRY)


def list_methods() -> list[str]:
    ensure_loaded()
    with _LOCK:
        return sorted(_REGISTRY.keys())


def load_builtins() -> None:
    """Import built-in method modules so their @method decorators run."""
    for mod in _BUILTIN_MODULES:
        importlib.import_module(mod)


def ensure_loaded() -> None:
    global _LOADED
    with _LOCK:
        if _LOADED:
            return
        load_builtins()
        _LOADED = True


# ---- Introspection helpers --------------------------------------------------


def _func_desc(fn: t.Callable[..., t.Any]) -> str | None:
    """Return a compact one-line description for a function from its docstring/signature."""
    lines = (fn.__doc__ or "").strip().splitlines()
    doc = lines[0].strip() if lines else ""
    if doc:
        return doc
    try:
        sig = str(inspect.signature(fn))
    except (TypeError, ValueError):
        sig = "(...)"
    return f"{fn.__name__}{sig}"


__all__ = [
    "MethodSpec",
    "register",
    "method",
    "resolve",
    "get_registry",
    "list_methods",
    "ensure_loaded",
]
