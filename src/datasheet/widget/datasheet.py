"""Datasheet: the host-facing grid object.

Wires :class:`DatasheetOptions` to an :class:`InteractionController` and
walks the grid producing render-ready rows. A UI toolkit integration
forwards its raw events to :meth:`Datasheet.dispatch` and paints the
output of :meth:`Datasheet.render`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np

from ..export.clipboard import ClipboardCodec
from .controller import DatasheetCallbacks, DatasheetHandle, InteractionController
from .events import EventSource, GridEvent
from .options import DatasheetOptions
from .scheduler import TickScheduler
from .view import CellView, cell_view, header_border_bottom, row_number_view, selection_mask


@dataclass(frozen=True)
class RenderedCell:
    row: int
    col: int
    column: Any
    item: Any
    content: Any
    view: CellView
    # highlight_color while selected or editing, else None
    highlight: str | None = None


@dataclass(frozen=True)
class RenderedRow:
    row: int
    number: int | None
    number_view: CellView
    cells: list[RenderedCell] = field(default_factory=list)
    # trailing empty row shown when show_empty_last_row is set
    placeholder: bool = False
    number_highlight: str | None = None


@dataclass(frozen=True)
class HeaderCell:
    col: int
    column: Any
    width: float
    border_bottom: bool
    highlight: str | None = None


class Datasheet:
    """One grid instance: options, interaction state and render loop.

    Parameters
    ----------
    options : DatasheetOptions, optional
        Built from ``**params`` when omitted.
    callbacks : DatasheetCallbacks, optional
    encoders : mapping or list of (format_name, encoder), optional
        Extra clipboard formats; the default TSV/HTML/JSON formats are
        kept unless overridden by name.
    scheduler : object with ``call_soon(fn)``, optional
        Without one, the Datasheet keeps its own :class:`TickScheduler`
        and drains it at the end of every :meth:`dispatch`, so
        ``on_selection_changed`` runs once the event has settled. A
        host-supplied scheduler is left to the host (see :meth:`tick`).
    """

    def __init__(
        self,
        options: DatasheetOptions | None = None,
        callbacks: DatasheetCallbacks | None = None,
        encoders: Any = None,
        clipboard: Any = None,
        scheduler: Any = None,
        container: Any = None,
        is_descendant_of: Callable[[Any, Any], bool] | None = None,
        **params: Any,
    ) -> None:
        self.options = options if options is not None else DatasheetOptions(**params)
        codec = ClipboardCodec(encoders, include_defaults=True) if encoders is not None else None
        self._drain_on_dispatch = scheduler is None
        self.controller = InteractionController(
            self.options,
            callbacks=callbacks,
            codec=codec,
            clipboard=clipboard,
            scheduler=scheduler if scheduler is not None else TickScheduler(),
            container=container,
            is_descendant_of=is_descendant_of,
        )

    @property
    def handle(self) -> DatasheetHandle:
        return self.controller.handle

    @property
    def state(self):
        return self.controller.state

    def dispatch(self, event: GridEvent) -> None:
        try:
            self.controller.dispatch(event)
        finally:
            if self._drain_on_dispatch:
                self.tick()

    def tick(self) -> int:
        """Run deferred notifications queued on a :class:`TickScheduler`.

        Returns how many ran. Schedulers driven by an event loop run on
        their own and are left alone.
        """
        scheduler = self.controller.scheduler
        if isinstance(scheduler, TickScheduler):
            return scheduler.run_pending()
        return 0

    def mount(self, events: EventSource) -> None:
        self.controller.attach(events)

    def unmount(self) -> None:
        """Remove document listeners and drop all selection/editing state."""
        self.controller.detach()
        self.controller.clear_selection()
        self.controller.end_editing()

    def _highlight(self, on: bool) -> str | None:
        return self.options.highlight_color if on else None

    def header(self) -> list[HeaderCell]:
        calc = self.controller.calculated
        cells = []
        for col, column in enumerate(self.options.columns):
            border = header_border_bottom(calc, col)
            cells.append(HeaderCell(
                col=col,
                column=column,
                width=self.options.width_of(col),
                border_bottom=border,
                highlight=self._highlight(border),
            ))
        return cells

    def render(self) -> list[RenderedRow]:
        """Render every row, calling ``render_item`` for each data cell."""
        calc = self.controller.calculated
        options = self.options
        frame = options.frame
        render_item = options.render_item
        columns = options.columns

        rows: list[RenderedRow] = []
        for row in range(options.n_rows):
            record = frame.iloc[row]
            cells = []
            for col, column in enumerate(columns):
                item = frame.iat[row, col]
                view = cell_view(calc, row, col)
                if render_item is not None:
                    content = render_item(
                        item=item,
                        row=record,
                        column=column,
                        row_idx=row,
                        col_idx=col,
                        is_editing=view.editing,
                    )
                else:
                    content = item
                cells.append(RenderedCell(
                    row, col, column, item, content, view,
                    highlight=self._highlight(view.selected or view.editing),
                ))
            rows.append(self._row(calc, row, cells))

        if options.show_empty_last_row:
            row = options.n_rows
            cells = []
            for col, column in enumerate(columns):
                view = cell_view(calc, row, col)
                cells.append(RenderedCell(
                    row, col, column, None, None, view,
                    highlight=self._highlight(view.selected),
                ))
            rows.append(self._row(calc, row, cells, placeholder=True))
        return rows

    def _row(self, calc, row: int, cells: list[RenderedCell], placeholder: bool = False) -> RenderedRow:
        number_view = row_number_view(calc, row)
        return RenderedRow(
            row=row,
            number=self.options.row_number(row),
            number_view=number_view,
            cells=cells,
            placeholder=placeholder,
            number_highlight=self._highlight(number_view.selected),
        )

    def selection_mask(self) -> np.ndarray:
        return selection_mask(self.controller.calculated, self.options.n_rows, self.options.n_cols)

    def __repr__(self) -> str:
        return (
            f"Datasheet(rows={self.options.n_rows}, cols={self.options.n_cols}, "
            f"mode={self.controller.mode.value})"
        )
