"""Input validation with clear error messages for grid hosts."""

from __future__ import annotations

from typing import Any, Callable

import pandas as pd


def validate_grid_data(data: Any) -> pd.DataFrame:
    """Validate that data is a DataFrame the grid can display.

    Returns the validated DataFrame (unchanged). An empty frame is
    allowed: a grid with no rows is a valid grid.
    """
    if not isinstance(data, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas DataFrame, got {type(data).__name__}. "
            "Wrap your rows with pd.DataFrame(records)."
        )
    if data.columns.has_duplicates:
        dupes = data.columns[data.columns.duplicated()].unique().tolist()
        raise ValueError(
            f"Column keys must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    return data


def validate_column_widths(widths: Any, n_cols: int | None = None) -> list[float]:
    """Validate per-column widths. Returns them as a float list."""
    if widths is None:
        return []
    try:
        values = [float(w) for w in widths]
    except (TypeError, ValueError):
        raise TypeError(
            f"Column widths must be a sequence of numbers, got {widths!r}."
        ) from None
    negative = [i for i, w in enumerate(values) if w < 0]
    if negative:
        raise ValueError(f"Column widths must be non-negative. Bad columns: {negative[:5]}")
    if n_cols is not None and len(values) > n_cols:
        raise ValueError(
            f"Got {len(values)} column widths for a grid with {n_cols} columns."
        )
    return values


def validate_callback(name: str, callback: Any) -> Callable | None:
    """Validate an optional host callback."""
    if callback is not None and not callable(callback):
        raise TypeError(f"{name} must be callable, got {type(callback).__name__}.")
    return callback


def validate_cell_index(row: Any, col: Any) -> tuple[int, int | None] | None:
    """Coerce a raw row/col marker into ints.

    Returns None when the row marker is missing or unparseable; the event
    that carried it should be ignored. A missing col marker is kept as
    None (row-number cell).
    """
    if row is None or row == "":
        return None
    try:
        row_idx = int(row)
    except (TypeError, ValueError):
        return None
    if col is None or col == "":
        return row_idx, None
    try:
        return row_idx, int(col)
    except (TypeError, ValueError):
        return None
