"""Grid coordinates and axis-aligned rectangles over (row, col)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Position:
    """Zero-based grid coordinates."""

    row: int
    col: int


@dataclass(frozen=True)
class Range(Generic[T]):
    """A start/end bound.

    ``Range[int]`` is a row interval, ``Range[Position]`` a rectangle.
    Nothing here forces ``start <= end``; use :func:`create_bound` or
    :func:`normalize_interval` to get a normalized copy.
    """

    start: T
    end: T


def create_bound(p1: Position, p2: Position) -> Range[Position]:
    """Return the normalized rectangle spanned by two corner positions."""
    return Range(
        start=Position(row=min(p1.row, p2.row), col=min(p1.col, p2.col)),
        end=Position(row=max(p1.row, p2.row), col=max(p1.col, p2.col)),
    )


def normalize_rect(rect: Range[Position] | None) -> Range[Position] | None:
    if rect is None:
        return None
    return create_bound(rect.start, rect.end)


def normalize_interval(interval: Range[int]) -> Range[int]:
    return Range(min(interval.start, interval.end), max(interval.start, interval.end))


def interval_rows(interval: Range[int] | None) -> list[int]:
    """Expand a row interval into the inclusive, ascending list of rows."""
    if interval is None:
        return []
    lo, hi = sorted((interval.start, interval.end))
    return list(range(lo, hi + 1))


def bounding_union(rects: Iterable[Range[Position] | None]) -> Range[Position] | None:
    """Smallest rectangle enclosing every given rectangle.

    ``None`` entries are skipped. Returns None when nothing is left.
    """
    result: Range[Position] | None = None
    for rect in rects:
        if rect is None:
            continue
        rect = create_bound(rect.start, rect.end)
        if result is None:
            result = rect
            continue
        result = Range(
            start=Position(
                row=min(result.start.row, rect.start.row),
                col=min(result.start.col, rect.start.col),
            ),
            end=Position(
                row=max(result.end.row, rect.end.row),
                col=max(result.end.col, rect.end.col),
            ),
        )
    return result


def rect_contains(rect: Range[Position] | None, row: int, col: int) -> bool:
    if rect is None:
        return False
    return (
        rect.start.row <= row <= rect.end.row
        and rect.start.col <= col <= rect.end.col
    )


def clip_rect(
    rect: Range[Position] | None, n_rows: int, n_cols: int,
) -> Range[Position] | None:
    """Clip a rectangle to ``[0, n_rows) x [0, n_cols)``.

    Returns None if nothing of the rectangle lies inside the bounds.
    """
    if rect is None:
        return None
    rect = create_bound(rect.start, rect.end)
    start_row = max(0, rect.start.row)
    start_col = max(0, rect.start.col)
    end_row = min(n_rows - 1, rect.end.row)
    end_col = min(n_cols - 1, rect.end.col)
    if start_row > end_row or start_col > end_col:
        return None
    return Range(Position(start_row, start_col), Position(end_row, end_col))
