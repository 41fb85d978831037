"""Pure selection model: geometry, row set algebra, calculator, value literals."""

from .geometry import Position, Range, bounding_union, create_bound
from .selection import CalculatedState, SelectionState, calculate
from .value_codec import ValueParseError, decode_value, encode_value

__all__ = [
    "Position",
    "Range",
    "bounding_union",
    "create_bound",
    "CalculatedState",
    "SelectionState",
    "calculate",
    "ValueParseError",
    "decode_value",
    "encode_value",
]
