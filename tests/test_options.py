"""Tests for DatasheetOptions."""

import pandas as pd
import pytest

from datasheet.widget.options import DatasheetOptions


class TestValidation:
    def test_bad_widths(self, small_frame):
        with pytest.raises(TypeError, match="numbers"):
            DatasheetOptions(data=small_frame, column_width=["wide"])

    def test_too_many_widths(self, small_frame):
        with pytest.raises(ValueError, match="3 columns"):
            DatasheetOptions(data=small_frame, column_width=[1, 2, 3, 4])

    def test_revalidates_on_change(self, small_frame):
        options = DatasheetOptions(data=small_frame)
        with pytest.raises(ValueError, match="unique"):
            options.data = pd.DataFrame([[1, 2]], columns=["a", "a"])

    def test_negative_min_width(self):
        with pytest.raises(ValueError):
            DatasheetOptions(column_min_width=-1)


class TestShape:
    def test_empty(self):
        options = DatasheetOptions()
        assert options.n_rows == 0
        assert options.n_cols == 0
        assert options.columns == []

    def test_frame(self, small_frame):
        options = DatasheetOptions(data=small_frame)
        assert (options.n_rows, options.n_cols) == (5, 3)
        assert options.columns == ["name", "qty", "meta"]

    def test_row_limit(self, small_frame):
        assert DatasheetOptions(data=small_frame).row_limit == 5
        assert DatasheetOptions(data=small_frame, show_empty_last_row=True).row_limit == 6


class TestCanEdit:
    def test_default_read_only(self, small_frame):
        assert not DatasheetOptions(data=small_frame).can_edit(0, 0)

    def test_flag(self, small_frame):
        options = DatasheetOptions(data=small_frame, allow_edit_for_cell=True)
        assert options.can_edit(4, 2)
        assert not options.can_edit(5, 0)
        assert not options.can_edit(0, 3)

    def test_predicate(self, small_frame):
        options = DatasheetOptions(data=small_frame, allow_edit_for_cell=lambda row, col: row % 2 == 0)
        assert options.can_edit(2, 0)
        assert not options.can_edit(1, 0)


class TestAccessors:
    def test_value_at(self, small_frame):
        options = DatasheetOptions(data=small_frame)
        assert options.value_at(1, 0) == "beta"
        assert options.value_at(9, 0) is None

    def test_width_of(self, small_frame):
        options = DatasheetOptions(data=small_frame, column_width=[120], column_min_width=50)
        assert options.width_of(0) == 120.0
        assert options.width_of(2) == 50.0

    def test_row_number(self, small_frame):
        assert DatasheetOptions(data=small_frame).row_number(0) is None
        assert DatasheetOptions(data=small_frame, start_row_number=1).row_number(0) == 1


class TestExportMatrix:
    def test_default_encoding(self, small_frame):
        options = DatasheetOptions(data=small_frame)
        assert options.export_matrix([0, 2], [1, 2]) == [[1, "{a: 1}"], [3, "[1, 2]"]]

    def test_host_encoder(self, small_frame):
        options = DatasheetOptions(data=small_frame, encode_value=lambda v: f"<{v}>")
        assert options.export_matrix([3], [0, 2]) == [["<delta>", "<x>"]]
