"""Shared test fixtures for datasheet."""

from decimal import Decimal

import pandas as pd
import pytest

from datasheet.export.clipboard import MemoryClipboard
from datasheet.widget.controller import DatasheetCallbacks, InteractionController
from datasheet.widget.events import CellTarget, PointerDown, PointerMove, PointerUp
from datasheet.widget.options import DatasheetOptions
from datasheet.widget.scheduler import TickScheduler


@pytest.fixture
def small_frame():
    """5x3 grid content."""
    return pd.DataFrame(
        {
            "name": ["alpha", "beta", "gamma", "delta", "epsilon"],
            "qty": [1, 2, 3, 4, 5],
            "meta": [{"a": 1}, None, [1, 2], "x", Decimal("1.50")],
        }
    )


class Recorder:
    """Collects host callback invocations as (name, args) tuples."""

    def __init__(self):
        self.calls = []

    def __call__(self, name):
        def _record(*args):
            self.calls.append((name, args))
        return _record

    def named(self, name):
        return [args for n, args in self.calls if n == name]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def callbacks(recorder):
    return DatasheetCallbacks(
        on_selection_changed=recorder("selection_changed"),
        on_delete_rows=recorder("delete_rows"),
        on_delete_cells=recorder("delete_cells"),
        on_copy_rows=recorder("copy_rows"),
        on_copy_cells=recorder("copy_cells"),
        on_paste_rows=recorder("paste_rows"),
        on_paste_cells=recorder("paste_cells"),
        on_start_editing=recorder("start_editing"),
        on_end_editing=recorder("end_editing"),
        on_column_width_change=recorder("column_width_change"),
    )


@pytest.fixture
def options(small_frame):
    return DatasheetOptions(data=small_frame, allow_edit_for_cell=True)


@pytest.fixture
def scheduler():
    return TickScheduler()


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def controller(options, callbacks, scheduler, clipboard):
    return InteractionController(
        options, callbacks=callbacks, scheduler=scheduler, clipboard=clipboard,
    )


def cell(row, col=None):
    return CellTarget(row=row, col=col)


def drag(controller, start, end, shift=False, meta=False):
    """Press on ``start``, move to ``end`` with the primary button, release."""
    controller.dispatch(PointerDown(cell(*start), shift_key=shift, meta_key=meta))
    controller.dispatch(PointerMove(cell(*end), buttons=1, shift_key=shift, meta_key=meta))
    controller.dispatch(PointerUp())
