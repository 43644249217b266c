"""
Meta value representation on the wire.

A stored meta value is either a plain string or a structured value (list,
dict, number, boolean, null). Both travel to the browser as display text;
the cell also carries its kind so the server can turn the text back into
exactly the value the store holds.

    RawValue("blue")            -> "blue"
    StructuredValue([1, 2])     -> "[1,2]"
    StructuredValue({"a": 1})   -> '{"a":1}'
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Union


class ValueKind(str, enum.Enum):
    RAW = "raw"
    STRUCTURED = "structured"


class MetaValueError(ValueError):
    """Raised when display text cannot be decoded as the declared kind."""


@dataclass(frozen=True)
class RawValue:
    text: str

    kind = ValueKind.RAW

    @property
    def value(self) -> str:
        return self.text

    def display(self) -> str:
        return self.text


@dataclass(frozen=True)
class StructuredValue:
    data: Any

    kind = ValueKind.STRUCTURED

    @property
    def value(self) -> Any:
        return self.data

    def display(self) -> str:
        return json.dumps(self.data, ensure_ascii=False, separators=(",", ":"))


WireValue = Union[RawValue, StructuredValue]


def from_stored(value: Any) -> WireValue:
    """Wrap a value read from a meta table."""
    if isinstance(value, str):
        return RawValue(value)
    return StructuredValue(value)


def infer_wire_value(text: str) -> WireValue:
    """
    Guess the kind of untagged display text.

    Text is treated as structured only when it decodes to a list, a dict or
    the literal ``false``; anything else ("12", "null", '"quoted"') stays a
    raw string.
    """
    try:
        data = json.loads(text)
    except ValueError:
        return RawValue(text)
    if isinstance(data, (list, dict)) or data is False:
        return StructuredValue(data)
    return RawValue(text)


def decode_wire_value(text: str, kind: ValueKind | None = None) -> WireValue:
    """Turn display text back into a value of the given kind."""
    if kind is None:
        return infer_wire_value(text)
    if kind is ValueKind.RAW:
        return RawValue(text)
    try:
        return StructuredValue(json.loads(text))
    except ValueError as exc:
        raise MetaValueError(f"Not a structured value: {exc}") from exc


def same_value(a: Any, b: Any) -> bool:
    """
    Compare two stored values without Python's cross-type equality.

    ``True == 1`` and ``1 == 1.0`` hold in Python but the store keeps them as
    different values, so types must match at every level.
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(same_value(a[k], b[k]) for k in a)
    if isinstance(a, list):
        return len(a) == len(b) and all(same_value(x, y) for x, y in zip(a, b))
    return a == b
