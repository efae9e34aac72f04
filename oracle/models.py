"""
Wire models for foreign calls.

Includes:
- ForeignCallParams: `params[0]` of resolve_foreign_call
- ForeignCallResult: the `{"values": [[...]]}` result

Validation:
- `function` must be a non-empty string.
- `inputs[0]` must be a non-empty array; its tokens are checked later by the
  hex decoder so that bad tokens surface as MalformedInput, not as a shape error.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ForeignCallParams(BaseModel):
    """
    One foreign call: a function name plus ordered input groups.
    Only the first input group is consumed.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
    function: str = Field(min_length=1)
    inputs: List[Any]

    @field_validator("inputs")
    @classmethod
    def _first_group_present(cls, v: List[Any]) -> List[Any]:
        if not v:
            raise ValueError("inputs must contain at least one input group")
        first = v[0]
        if not isinstance(first, list):
            raise ValueError("inputs[0] must be an array of hex tokens")
        if not first:
            raise ValueError("inputs[0] must not be empty")
        return v

    @property
    def first_group(self) -> List[Any]:
        return list(self.inputs[0])


class ForeignCallResult(BaseModel):
    """`values` holds exactly one element: the hex tokens of the encoded text."""

    model_config = ConfigDict(frozen=True)
    values: List[List[str]]

    @field_validator("values")
    @classmethod
    def _single_element(cls, v: List[List[str]]) -> List[List[str]]:
        if len(v) != 1:
            raise ValueError("values must hold exactly one token sequence")
        return v


__all__ = ["ForeignCallParams", "ForeignCallResult"]
