"""Tests for EditSession."""

from datetime import date
from decimal import Decimal

import numpy as np
import pandas as pd

from datasheet.core.geometry import Position
from datasheet.widget.editing import EditSession


POS = Position(1, 2)


class TestEditSession:
    def test_structured_text(self):
        session = EditSession(POS, {"a": 1})
        assert session.text == "{\n  a: 1\n}"
        assert session.value == {"a": 1}
        assert session.is_valid
        assert not session.changed

    def test_none_starts_empty(self):
        assert EditSession(POS, None).text == ""
        assert EditSession(POS, None, structured=False).text == ""

    def test_set_text_parses(self):
        session = EditSession(POS, 1)
        session.set_text("Decimal('2.50')")
        assert session.value == Decimal("2.50")
        assert session.changed

    def test_parse_error_keeps_last_value(self):
        session = EditSession(POS, 1)
        session.set_text("[1, 2]")
        session.set_text("[1, ")
        assert not session.is_valid
        assert session.value == [1, 2]
        assert session.text == "[1, "
        assert not session.changed

    def test_error_cleared_on_fix(self):
        session = EditSession(POS, 1)
        session.set_text("{")
        session.set_text("{}")
        assert session.is_valid
        assert session.value == {}

    def test_plain_text_mode(self):
        session = EditSession(POS, 5, structured=False)
        assert session.text == "5"
        session.set_text("{not parsed")
        assert session.value == "{not parsed"
        assert session.is_valid

    def test_set_value(self):
        session = EditSession(POS, "a")
        session.set_value([1])
        assert session.text == "[\n  1\n]"
        assert session.value == [1]

    def test_cancel_restores_original(self):
        session = EditSession(POS, "a")
        session.set_text('"b"')
        session.cancel()
        assert session.cancelled
        assert session.value == "a"
        assert not session.changed

    def test_repr(self):
        assert "row=1" in repr(EditSession(POS, 1))


class TestMissingAndOpaqueValues:
    def test_untouched_nan_is_unchanged(self):
        session = EditSession(POS, np.float64("nan"))
        assert session.text == ""
        assert session.changed is False

    def test_untouched_pd_na(self):
        session = EditSession(POS, pd.NA)
        assert session.changed is False
        assert repr(session) == "EditSession(row=1, col=2, clean)"

    def test_filling_a_missing_cell(self):
        session = EditSession(POS, pd.NA)
        session.set_text("3")
        assert session.changed is True

    def test_clearing_a_cell(self):
        session = EditSession(POS, 3)
        session.set_text("null")
        assert session.changed is True

    def test_date_falls_back_to_plain_text(self):
        session = EditSession(POS, date(2024, 1, 2))
        assert session.text == "2024-01-02"
        assert not session.structured
        session.set_text("2024-02-03")
        assert session.value == "2024-02-03"
        assert session.changed is True

    def test_timedelta_and_set(self):
        assert EditSession(POS, pd.Timedelta(days=1)).text == "1 days 00:00:00"
        assert EditSession(POS, {1}).text == "{1}"

    def test_set_value_without_literal_form(self):
        session = EditSession(POS, 1)
        session.set_value(date(2024, 1, 2))
        assert session.text == "2024-01-02"
