"""DatasheetOptions: host-supplied configuration for one grid instance."""

from __future__ import annotations

from typing import Any

import pandas as pd
import param

from ..core.validation import validate_column_widths, validate_grid_data
from ..export.clipboard import encode_cell

DEFAULT_HIGHLIGHT_COLOR = "#2684ff"


class DatasheetOptions(param.Parameterized):
    """Everything the interaction core reads from its host.

    ``data`` is the grid's content: one DataFrame row per grid row, one
    column per grid column, positional (``iat``) addressing.
    """

    # --- Data ---
    data = param.DataFrame(default=None, allow_None=True, doc="Grid content")

    # --- Selection & editing ---
    allow_selection = param.Boolean(default=True)
    # bool, or callable(row, col) -> bool
    allow_edit_for_cell = param.Parameter(default=False)
    edit_as_literal = param.Boolean(
        default=True, doc="Parse edited text as a structured value literal",
    )

    # --- Columns ---
    column_width = param.List(default=[])
    column_min_width = param.Number(default=64, bounds=(0, None))

    # --- Rows ---
    start_row_number = param.Integer(default=None, allow_None=True)
    show_empty_last_row = param.Boolean(default=False)

    # --- Rendering ---
    highlight_color = param.String(default=DEFAULT_HIGHLIGHT_COLOR)
    render_item = param.Callable(default=None, allow_None=True)

    # --- Clipboard ---
    encode_value = param.Callable(
        default=None, allow_None=True,
        doc="Maps a raw cell value to what the clipboard encoders receive",
    )

    def __init__(self, **params):
        super().__init__(**params)
        self._validate()

    @param.depends("data", "column_width", watch=True)
    def _validate(self) -> None:
        if self.data is not None:
            validate_grid_data(self.data)
        validate_column_widths(self.column_width, self.n_cols if self.data is not None else None)

    @property
    def frame(self) -> pd.DataFrame:
        return self.data if self.data is not None else pd.DataFrame()

    @property
    def n_rows(self) -> int:
        return len(self.frame)

    @property
    def n_cols(self) -> int:
        return self.frame.shape[1]

    @property
    def columns(self) -> list:
        return list(self.frame.columns)

    @property
    def row_limit(self) -> int:
        """Rows a paste may target, including the empty trailing row."""
        return self.n_rows + (1 if self.show_empty_last_row else 0)

    def can_edit(self, row: int, col: int) -> bool:
        if not (0 <= row < self.n_rows and 0 <= col < self.n_cols):
            return False
        predicate = self.allow_edit_for_cell
        if callable(predicate):
            return bool(predicate(row, col))
        return bool(predicate)

    def value_at(self, row: int, col: int) -> Any:
        if 0 <= row < self.n_rows and 0 <= col < self.n_cols:
            return self.frame.iat[row, col]
        return None

    def width_of(self, col: int) -> float:
        if col < len(self.column_width):
            return float(self.column_width[col])
        return float(self.column_min_width)

    def row_number(self, row: int) -> int | None:
        if self.start_row_number is None:
            return None
        return self.start_row_number + row

    def export_matrix(self, rows: list[int], cols: list[int]) -> list[list[Any]]:
        """Values of ``rows`` x ``cols`` passed through ``encode_value``.

        Without a host ``encode_value``, structured values become one-line
        literals and scalars pass through.
        """
        encode = self.encode_value or encode_cell
        return [[encode(self.frame.iat[r, c]) for c in cols] for r in rows]
