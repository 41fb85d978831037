"""Tests for per-cell render flags."""

import numpy as np

from datasheet.core.geometry import Position, Range
from datasheet.core.selection import SelectionState, calculate
from datasheet.widget.view import (
    cell_view,
    header_border_bottom,
    row_number_view,
    selection_mask,
)


def cells(r1, c1, r2, c2):
    return calculate(SelectionState(selected_cells=Range(Position(r1, c1), Position(r2, c2))))


def rows(*selected):
    return calculate(SelectionState(selected_rows=list(selected)))


class TestCellView:
    def test_selected_corner(self):
        view = cell_view(cells(1, 1, 2, 2), 1, 1)
        assert view.selected
        assert view.border_right and view.border_bottom
        assert view.edges == frozenset({"top", "left"})

    def test_left_neighbour_lights_shared_border(self):
        view = cell_view(cells(1, 1, 2, 2), 1, 0)
        assert not view.selected
        assert view.border_right
        assert not view.border_bottom

    def test_cell_above_lights_shared_border(self):
        view = cell_view(cells(1, 1, 2, 2), 0, 1)
        assert view.border_bottom
        assert not view.border_right
        assert view.edges == frozenset()

    def test_row_selection(self):
        calc = rows(2)
        assert cell_view(calc, 2, 0).selected
        assert cell_view(calc, 1, 0).border_bottom
        assert not cell_view(calc, 3, 0).border_bottom

    def test_editing_flag(self):
        calc = calculate(SelectionState(editing=Position(0, 0)))
        assert cell_view(calc, 0, 0).editing
        assert not cell_view(calc, 0, 1).editing

    def test_no_selection(self):
        view = cell_view(calculate(SelectionState()), 0, 0)
        assert not (view.selected or view.border_right or view.border_bottom)


class TestRowNumberView:
    def test_selected_row(self):
        view = row_number_view(rows(2), 2)
        assert view.selected and view.border_right and view.border_bottom

    def test_row_above_selection(self):
        assert row_number_view(rows(2), 1).border_bottom

    def test_first_column_cell_selected(self):
        view = row_number_view(cells(0, 0, 1, 1), 1)
        assert view.border_right
        assert not view.selected


class TestHeader:
    def test_first_row_selected(self):
        assert header_border_bottom(rows(0), None)
        assert header_border_bottom(rows(0), 2)

    def test_first_row_cells(self):
        calc = cells(0, 1, 3, 1)
        assert header_border_bottom(calc, 1)
        assert not header_border_bottom(calc, 0)
        assert not header_border_bottom(calc, None)


class TestSelectionMask:
    def test_rows_and_cells(self):
        calc = calculate(SelectionState(
            selected_cells=Range(Position(0, 0), Position(0, 1)),
            select_rows=Range(2, 2),
            shift_key=True,
        ))
        mask = selection_mask(calc, 4, 3)
        expected = np.zeros((4, 3), dtype=bool)
        expected[0, :2] = True
        expected[2, :] = True
        np.testing.assert_array_equal(mask, expected)

    def test_out_of_bounds_clipped(self):
        mask = selection_mask(cells(2, 2, 9, 9), 3, 3)
        assert mask.sum() == 1
        assert mask[2, 2]


class TestBoundsEdges:
    """Outline of the enclosing rectangle of shift-combined ranges."""

    calc = calculate(SelectionState(
        selected_cells=Range(Position(0, 0), Position(1, 1)),
        select_start=Position(4, 4),
        select_end=Position(3, 2),
        shift_key=True,
    ))

    def test_bounds_enclose_both_ranges(self):
        assert self.calc.selection_bounds == Range(Position(0, 0), Position(4, 4))

    def test_corners(self):
        assert cell_view(self.calc, 0, 0).edges == frozenset({"top", "left"})
        assert cell_view(self.calc, 0, 4).edges == frozenset({"top", "right"})
        assert cell_view(self.calc, 4, 0).edges == frozenset({"bottom", "left"})
        assert cell_view(self.calc, 4, 4).edges == frozenset({"bottom", "right"})

    def test_sides_and_interior(self):
        assert cell_view(self.calc, 2, 0).edges == frozenset({"left"})
        assert cell_view(self.calc, 4, 2).edges == frozenset({"bottom"})
        assert cell_view(self.calc, 2, 2).edges == frozenset()

    def test_gap_between_ranges_is_inside(self):
        # neither range covers (0, 4); the enclosing rectangle does
        view = cell_view(self.calc, 0, 4)
        assert view.selected

    def test_outside(self):
        assert cell_view(self.calc, 5, 0).edges == frozenset()
        assert cell_view(self.calc, 0, 5).edges == frozenset()

    def test_single_cell(self):
        view = cell_view(cells(2, 3, 2, 3), 2, 3)
        assert view.edges == frozenset({"top", "bottom", "left", "right"})
