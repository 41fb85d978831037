"""EditSession: the draft value of the cell being edited."""

from __future__ import annotations

from typing import Any

from ..core.geometry import Position
from ..core.value_codec import ValueParseError, decode_value, encode_value, is_missing


class EditSession:
    """Holds the text typed into an editing cell and its parsed value.

    A parse failure is kept on :attr:`error` and leaves :attr:`value` at
    the last value that parsed; the session stays open so the user can
    fix the input.

    A value the literal format cannot express (``date``, ``Timedelta``,
    sets, arbitrary objects) opens the session in plain-text mode.
    """

    def __init__(self, position: Position, original: Any, structured: bool = True) -> None:
        self.position = position
        self.original = original
        self.structured = structured
        self.value: Any = original
        self.error: ValueParseError | None = None
        self.cancelled = False
        self.text = self._format(original)

    def _format(self, value: Any) -> str:
        if is_missing(value):
            return ""
        if self.structured:
            try:
                return encode_value(value)
            except TypeError:
                self.structured = False
        return str(value)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        if self.cancelled or not self.is_valid:
            return False
        value_missing = is_missing(self.value)
        original_missing = is_missing(self.original)
        if value_missing or original_missing:
            return value_missing != original_missing
        try:
            return bool(self.value != self.original)
        except (TypeError, ValueError):
            # comparisons that don't reduce to one bool (arrays, NA-like)
            return True

    def set_text(self, text: str) -> None:
        """Update the draft text, re-parsing it for structured cells."""
        self.text = text
        if not self.structured:
            self.value = text
            self.error = None
            return
        try:
            self.value = decode_value(text)
        except ValueParseError as e:
            self.error = e
        else:
            self.error = None

    def set_value(self, value: Any) -> None:
        """Set the draft value directly (typed inputs, pickers)."""
        self.value = value
        self.error = None
        self.text = self._format(value)

    def cancel(self) -> None:
        self.cancelled = True
        self.value = self.original
        self.error = None

    def __repr__(self) -> str:
        state = "invalid" if self.error is not None else ("changed" if self.changed else "clean")
        return f"EditSession(row={self.position.row}, col={self.position.col}, {state})"
