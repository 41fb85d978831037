"""Set algebra over row-index lists.

All results are sorted, duplicate-free Python int lists so they can be
handed straight to host callbacks.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np


def _as_index_array(rows: Iterable[int]) -> np.ndarray:
    return np.asarray(list(rows), dtype=np.int64)


def normalize_rows(rows: Iterable[int] | None) -> list[int]:
    """Sorted unique copy of ``rows``."""
    if rows is None:
        return []
    return np.unique(_as_index_array(rows)).tolist()


def row_union(a: Iterable[int], b: Iterable[int]) -> list[int]:
    return np.union1d(_as_index_array(a), _as_index_array(b)).tolist()


def row_xor(a: Iterable[int], b: Iterable[int]) -> list[int]:
    """Symmetric difference: rows in exactly one of ``a`` and ``b``."""
    return np.setxor1d(_as_index_array(a), _as_index_array(b)).tolist()


def filter_rows(rows: Iterable[int] | None, limit: int) -> list[int]:
    """Sorted unique rows within ``[0, limit)``.

    Drops stale indices left behind when the data shrank after the
    selection was made.
    """
    arr = np.unique(_as_index_array(rows or []))
    return arr[(arr >= 0) & (arr < limit)].tolist()
