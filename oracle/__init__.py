"""
Foreign-call oracle.

A JSON-RPC endpoint that resolves `resolve_foreign_call` requests from a host
circuit evaluator by running one of a closed set of base64 transformations.

Exposes:
- __version__: semantic version string (see oracle/version.py)
"""

from .version import __version__

__all__ = ["__version__"]
