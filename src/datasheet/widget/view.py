"""Per-cell render flags derived from a CalculatedState.

A renderer asks, for every cell, whether it is selected, whether it is
the editing cell, and which of its borders to emphasize. Right and bottom
borders are shared with the neighbouring cell, so a border lights up when
either side of it is selected.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.geometry import clip_rect
from ..core.selection import CalculatedState


@dataclass(frozen=True)
class CellView:
    selected: bool
    editing: bool
    border_right: bool
    border_bottom: bool
    # sides of this cell lying on the outline of the selection bounds
    edges: frozenset[str] = frozenset()


def _bounds_edges(calc: CalculatedState, row: int, col: int) -> frozenset[str]:
    bounds = calc.selection_bounds
    if bounds is None:
        return frozenset()
    if not (bounds.start.row <= row <= bounds.end.row and bounds.start.col <= col <= bounds.end.col):
        return frozenset()
    edges = set()
    if row == bounds.start.row:
        edges.add("top")
    if row == bounds.end.row:
        edges.add("bottom")
    if col == bounds.start.col:
        edges.add("left")
    if col == bounds.end.col:
        edges.add("right")
    return frozenset(edges)


def cell_view(calc: CalculatedState, row: int, col: int) -> CellView:
    """Flags for the data cell at (row, col)."""
    row_selected = calc.is_row_selected(row)
    cell_selected = calc.is_cell_selected(row, col)
    return CellView(
        selected=row_selected or cell_selected,
        editing=calc.is_cell_editing(row, col),
        border_right=(
            row_selected or cell_selected or calc.is_cell_selected(row, col + 1)
        ),
        border_bottom=(
            row_selected
            or calc.is_row_selected(row + 1)
            or cell_selected
            or calc.is_cell_selected(row + 1, col)
        ),
        edges=_bounds_edges(calc, row, col),
    )


def row_number_view(calc: CalculatedState, row: int) -> CellView:
    """Flags for the row-number cell leading ``row``."""
    row_selected = calc.is_row_selected(row)
    return CellView(
        selected=row_selected,
        editing=False,
        border_right=row_selected or calc.is_cell_selected(row, 0),
        border_bottom=row_selected or calc.is_row_selected(row + 1),
    )


def header_border_bottom(calc: CalculatedState, col: int | None) -> bool:
    """Whether the header cell above ``col`` (None: row-number column) is emphasized."""
    if calc.is_row_selected(0):
        return True
    return col is not None and calc.is_cell_selected(0, col)


def selection_mask(calc: CalculatedState, n_rows: int, n_cols: int) -> np.ndarray:
    """Boolean (n_rows, n_cols) mask of every selected cell."""
    mask = np.zeros((n_rows, n_cols), dtype=bool)
    rows = [r for r in calc.selecting_rows if 0 <= r < n_rows]
    if rows:
        mask[rows, :] = True
    rect = clip_rect(calc.selecting_cells, n_rows, n_cols)
    if rect is not None:
        mask[rect.start.row:rect.end.row + 1, rect.start.col:rect.end.col + 1] = True
    return mask
