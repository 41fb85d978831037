"""Text literals for structured cell values.

Cells holding objects, arrays, dates or decimals are edited as text in
this format::

    {name: "widget", tags: ['a', 'b'], price: Decimal('9.90'),
     created: ISODate('2024-01-02T03:04:05.000Z'), extra: null}

:func:`encode_value` pretty-prints a value, :func:`decode_value` parses
it back. Parse failures raise :class:`ValueParseError` with the position
of the offending character.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

import numpy as np
import pandas as pd

_NORMAL_NAME = re.compile(r"^[a-z_]\w*$", re.IGNORECASE)
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}


class ValueParseError(ValueError):
    """Raised when a value literal cannot be parsed."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


def _format_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _format_key(key: str) -> str:
    if _NORMAL_NAME.match(key):
        return key
    escaped = key.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def is_missing(value: Any) -> bool:
    """True for None and scalar missing markers (NaN, NaT, pd.NA)."""
    if value is None:
        return True
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def encode_value(value: Any, indent: int = 2) -> str:
    """Encode a cell value as a literal.

    ``indent=0`` produces a single line.
    """

    def _encode(value: Any, padding: int) -> str:
        newline = "\n" if indent else ""
        separator = f",{newline or ' '}"
        if isinstance(value, np.generic):
            value = value.item()
        if is_missing(value):
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return _format_number(value)
        if isinstance(value, str):
            return json.dumps(value, ensure_ascii=False)
        if isinstance(value, datetime):
            return f"ISODate('{_format_date(value)}')"
        if isinstance(value, Decimal):
            return f"Decimal('{value}')"
        pad = " " * padding
        close_pad = " " * (padding - indent)
        if isinstance(value, (list, tuple)):
            if not value:
                return "[]"
            items = separator.join(f"{pad}{_encode(v, padding + indent)}" for v in value)
            return f"[{newline}{items}{newline}{close_pad}]"
        if isinstance(value, dict):
            if not value:
                return "{}"
            items = separator.join(
                f"{pad}{_format_key(str(k))}: {_encode(v, padding + indent)}"
                for k, v in value.items()
            )
            return f"{{{newline}{items}{newline}{close_pad}}}"
        raise TypeError(f"Cannot encode value of type {type(value).__name__}.")

    return _encode(value, indent)


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> ValueParseError:
        return ValueParseError(f"{message} at position {self.pos}", self.pos)

    def peek(self, length: int = 1) -> str:
        return self.text[self.pos:self.pos + length]

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.error(f"Expected '{char}'")
        self.pos += 1

    def parse(self) -> Any:
        value = self.parse_value()
        self.skip_whitespace()
        if self.pos != len(self.text):
            raise self.error(f"Unexpected character '{self.text[self.pos]}'")
        return value

    def parse_value(self) -> Any:
        self.skip_whitespace()
        if self.pos >= len(self.text):
            raise self.error("Unexpected end of input")

        for literal, value in (("null", None), ("true", True), ("false", False)):
            if self.peek(len(literal)) == literal:
                self.pos += len(literal)
                return value

        if self.peek(8) == "ISODate(":
            return self.parse_wrapped("ISODate(", self._to_date)
        if self.peek(8) == "Decimal(":
            return self.parse_wrapped("Decimal(", self._to_decimal)

        char = self.text[self.pos]
        if char in "\"'":
            return self.parse_string()
        if char == "-" or char.isdigit():
            return self.parse_number()
        if char == "[":
            return self.parse_array()
        if char == "{":
            return self.parse_object()
        raise self.error(f"Unexpected character '{char}'")

    def parse_wrapped(self, prefix: str, convert) -> Any:
        self.pos += len(prefix)
        self.skip_whitespace()
        start = self.pos
        raw = self.parse_string()
        self.skip_whitespace()
        self.expect(")")
        try:
            return convert(raw)
        except ValueError:
            self.pos = start
            raise self.error(f"Invalid {prefix[:-1]} literal {raw!r}") from None

    @staticmethod
    def _to_date(raw: str) -> datetime:
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return datetime.fromisoformat(raw)

    @staticmethod
    def _to_decimal(raw: str) -> Decimal:
        try:
            value = Decimal(raw)
        except InvalidOperation:
            raise ValueError(raw) from None
        if not value.is_finite():
            raise ValueError(raw)
        return value

    def parse_string(self) -> str:
        quote = self.peek()
        if quote not in ("'", '"'):
            raise self.error("Expected string")
        self.pos += 1
        chars = []
        while self.pos < len(self.text) and self.text[self.pos] != quote:
            char = self.text[self.pos]
            if char == "\\":
                self.pos += 1
                if self.pos >= len(self.text):
                    raise self.error("Unexpected end of string")
                escaped = self.text[self.pos]
                chars.append(_ESCAPES.get(escaped, escaped))
            else:
                chars.append(char)
            self.pos += 1
        if self.pos >= len(self.text):
            raise self.error("Unterminated string")
        self.pos += 1
        return "".join(chars)

    def parse_number(self) -> int | float:
        start = self.pos
        if self.peek() == "-":
            self.pos += 1
        self._digits()
        is_float = False
        if self.peek() == ".":
            is_float = True
            self.pos += 1
            self._digits()
        if self.peek() in ("e", "E"):
            is_float = True
            self.pos += 1
            if self.peek() in ("+", "-"):
                self.pos += 1
            self._digits()
        raw = self.text[start:self.pos]
        try:
            return float(raw) if is_float else int(raw)
        except ValueError:
            self.pos = start
            raise self.error(f"Invalid number {raw!r}") from None

    def _digits(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isdigit():
            self.pos += 1

    def parse_array(self) -> list:
        self.expect("[")
        self.skip_whitespace()
        items: list = []
        if self.peek() == "]":
            self.pos += 1
            return items
        while True:
            items.append(self.parse_value())
            self.skip_whitespace()
            if self.peek() == "]":
                self.pos += 1
                return items
            self.expect(",")
            self.skip_whitespace()
            # trailing comma
            if self.peek() == "]":
                self.pos += 1
                return items

    def parse_key(self) -> str:
        if self.peek() in ("'", '"'):
            return self.parse_string()
        start = self.pos
        while self.pos < len(self.text) and (
            self.text[self.pos].isalnum() or self.text[self.pos] in "_$"
        ):
            self.pos += 1
        if start == self.pos:
            raise self.error("Expected key")
        return self.text[start:self.pos]

    def parse_object(self) -> dict:
        self.expect("{")
        self.skip_whitespace()
        result: dict = {}
        if self.peek() == "}":
            self.pos += 1
            return result
        while True:
            self.skip_whitespace()
            key = self.parse_key()
            self.skip_whitespace()
            self.expect(":")
            result[key] = self.parse_value()
            self.skip_whitespace()
            if self.peek() == "}":
                self.pos += 1
                return result
            self.expect(",")
            self.skip_whitespace()
            if self.peek() == "}":
                self.pos += 1
                return result


def decode_value(text: str) -> Any:
    """Parse a value literal produced by :func:`encode_value`."""
    return _Parser(text).parse()
