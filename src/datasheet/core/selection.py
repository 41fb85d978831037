"""SelectionState and the selection calculator.

SelectionState is the mutable value a grid instance owns. It holds two
kinds of selection side by side:

- transient keys (``select_start``/``select_end`` for a cell drag,
  ``select_rows`` for a row drag) describing a drag still in progress
- committed keys (``selected_cells``, ``selected_rows``) surviving the
  pointer release

:func:`calculate` folds both into a render-ready :class:`CalculatedState`
using the modifier-key combination rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import (
    Position,
    Range,
    bounding_union,
    create_bound,
    interval_rows,
    normalize_rect,
    rect_contains,
)
from .set_ops import normalize_rows, row_union, row_xor

TRANSIENT_KEYS = ("select_start", "select_end", "select_rows")
SELECTION_KEYS = TRANSIENT_KEYS + ("selected_cells", "selected_rows")


@dataclass
class SelectionState:
    """Mutable per-grid selection and editing state."""

    select_start: Position | None = None
    select_end: Position | None = None
    select_rows: Range[int] | None = None
    selected_cells: Range[Position] | None = None
    selected_rows: list[int] = field(default_factory=list)
    shift_key: bool = False
    meta_key: bool = False
    editing: Position | None = None

    @property
    def has_transient_cells(self) -> bool:
        return self.select_start is not None and self.select_end is not None

    @property
    def has_transient_rows(self) -> bool:
        return self.select_rows is not None

    @property
    def has_selection(self) -> bool:
        return (
            self.has_transient_cells
            or self.has_transient_rows
            or self.selected_cells is not None
            or bool(self.selected_rows)
        )

    def clear_transient(self) -> None:
        self.select_start = None
        self.select_end = None
        self.select_rows = None

    def clear_transient_cells(self) -> None:
        self.select_start = None
        self.select_end = None

    def clear_selection(self) -> None:
        """Drop every selection key, transient and committed."""
        self.clear_transient()
        self.selected_cells = None
        self.selected_rows = []

    def end_editing(self) -> None:
        self.editing = None


@dataclass(frozen=True)
class CalculatedState:
    """Render-ready view of a SelectionState.

    ``selecting_rows`` and ``selecting_cells`` are what the grid should
    show as selected right now (transient combined with committed).
    ``selection_bounds`` is the smallest rectangle enclosing every active
    cell range and drives border emphasis. It is the same object as
    ``selecting_cells``: membership and outline both use the enclosing
    rectangle, the view reads it under this name.
    """

    select_start: Position | None
    select_end: Position | None
    select_rows: Range[int] | None
    selected_cells: Range[Position] | None
    selected_rows: list[int]
    shift_key: bool
    meta_key: bool
    editing: Position | None
    selecting_rows: list[int]
    selecting_cells: Range[Position] | None
    active_cells: tuple[Range[Position], ...]
    selection_bounds: Range[Position] | None

    def is_row_selected(self, row: int) -> bool:
        return row in self.selecting_rows

    def is_cell_selected(self, row: int, col: int) -> bool:
        return rect_contains(self.selecting_cells, row, col)

    def is_cell_editing(self, row: int, col: int) -> bool:
        return (
            self.editing is not None
            and self.editing.row == row
            and self.editing.col == col
        )


def combine_rows(
    committed: list[int], transient: list[int] | None, shift: bool, meta: bool,
) -> list[int]:
    """Combine committed rows with a transient row drag.

    Shift is checked before meta: shift gives the union, meta the
    symmetric difference, neither lets the transient rows replace the
    committed ones. ``transient=None`` means no row drag is in progress.
    """
    if transient is None:
        return list(committed)
    if shift:
        return row_union(committed, transient)
    if meta:
        return row_xor(committed, transient)
    return list(transient)


def combine_cells(
    committed: Range[Position] | None,
    transient: Range[Position] | None,
    shift: bool,
    meta: bool,
) -> tuple[Range[Position], ...]:
    """Active cell rectangles under the modifier rule.

    There is no 2-D toggle, so meta behaves like shift here.
    """
    if shift or meta:
        return tuple(r for r in (committed, transient) if r is not None)
    chosen = transient if transient is not None else committed
    return (chosen,) if chosen is not None else ()


def calculate(state: SelectionState) -> CalculatedState:
    """Derive the normalized, render-ready selection view."""
    committed_rows = normalize_rows(state.selected_rows)
    transient_rows = interval_rows(state.select_rows) if state.select_rows is not None else None

    committed_cells = normalize_rect(state.selected_cells)
    transient_cells = (
        create_bound(state.select_start, state.select_end)
        if state.select_start is not None and state.select_end is not None
        else None
    )

    selecting_rows = combine_rows(
        committed_rows, transient_rows, state.shift_key, state.meta_key,
    )
    active_cells = combine_cells(
        committed_cells, transient_cells, state.shift_key, state.meta_key,
    )
    selecting_cells = bounding_union(active_cells)

    return CalculatedState(
        select_start=state.select_start,
        select_end=state.select_end,
        select_rows=state.select_rows,
        selected_cells=committed_cells,
        selected_rows=committed_rows,
        shift_key=state.shift_key,
        meta_key=state.meta_key,
        editing=state.editing,
        selecting_rows=selecting_rows,
        selecting_cells=selecting_cells,
        active_cells=active_cells,
        selection_bounds=selecting_cells,
    )
