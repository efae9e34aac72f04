"""
Foreign-call resolution errors.

Every failure the resolver can raise derives from `ForeignCallError`. All of
them are terminal for the call that produced them; nothing is retried.

    InvalidRequest   shape violation (missing params[0], function or inputs[0])
    MalformedInput   a byte token is not base-16 or does not fit in a byte
    UnknownFunction  the function name is outside the closed set
"""
from __future__ import annotations

from typing import Any, Dict


class ForeignCallError(Exception):
    """Base class for faults raised while resolving a foreign call."""

    kind: str = "foreign_call_error"

    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(message)
        self.message = message
        self.data: Dict[str, Any] = dict(data)

    def __str__(self) -> str:
        return self.message


class InvalidRequest(ForeignCallError):
    kind = "invalid_request"

    def __init__(self, detail: str = "Invalid foreign call parameters", **data: Any) -> None:
        super().__init__(detail, **data)


class MalformedInput(ForeignCallError):
    kind = "malformed_input"

    def __init__(self, token: Any, index: int, reason: str = "not a base-16 byte") -> None:
        super().__init__(
            f"Malformed input byte at index {index}: {token!r} is {reason}",
            token=token,
            index=index,
        )
        self.token = token
        self.index = index


class UnknownFunction(ForeignCallError):
    kind = "unknown_function"

    def __init__(self, name: Any) -> None:
        super().__init__(f"Unknown function: {name}", function=name)
        self.name = name


__all__ = [
    "ForeignCallError",
    "InvalidRequest",
    "MalformedInput",
    "UnknownFunction",
]
