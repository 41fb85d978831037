"""InteractionController: the grid's selection/editing state machine.

Raw input arrives as messages from :mod:`.events` through
:meth:`InteractionController.dispatch`. Each message mutates the one
:class:`SelectionState` the controller owns and may invoke host
callbacks. The selection-changed notification is the only deferred step;
it goes through a scheduler so observers see the committed value.

Modes::

    IDLE ──pointer down (row number)──> DRAGGING_ROWS ──pointer up──> IDLE
    IDLE ──pointer down (data cell)───> DRAGGING_CELLS ─pointer up──> IDLE
    any  ──double click (editable)────> EDITING
    EDITING ──click elsewhere / Enter / Escape / click outside──> IDLE
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, fields
from typing import Any, Callable

from ..core.geometry import Position, Range, clip_rect
from ..core.selection import CalculatedState, SelectionState, calculate
from ..core.set_ops import filter_rows
from ..core.validation import validate_callback
from ..export.clipboard import ClipboardCodec, MemoryClipboard
from .editing import EditSession
from .events import (
    PRIMARY_BUTTON,
    ColumnResizeStart,
    Copy,
    DocumentPointerDown,
    DoubleClick,
    EventSource,
    GridEvent,
    KeyDown,
    Paste,
    PointerDown,
    PointerMove,
    PointerUp,
)
from .options import DatasheetOptions
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)

DELETE_KEYS = frozenset({"Delete", "Backspace"})
DOCUMENT_POINTER_DOWN = "pointerdown"


class Mode(enum.Enum):
    IDLE = "idle"
    DRAGGING_ROWS = "dragging_rows"
    DRAGGING_CELLS = "dragging_cells"
    EDITING = "editing"


@dataclass
class DatasheetCallbacks:
    """Host callbacks. Every one is optional.

    All but ``on_selection_changed`` receive the :class:`DatasheetHandle`
    as their last argument.
    """

    on_selection_changed: Callable[[], Any] | None = None
    on_delete_rows: Callable[..., Any] | None = None
    on_delete_cells: Callable[..., Any] | None = None
    on_copy_rows: Callable[..., Any] | None = None
    on_copy_cells: Callable[..., Any] | None = None
    on_paste_rows: Callable[..., Any] | None = None
    on_paste_cells: Callable[..., Any] | None = None
    on_start_editing: Callable[..., Any] | None = None
    on_end_editing: Callable[..., Any] | None = None
    on_column_width_change: Callable[..., Any] | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            validate_callback(f.name, getattr(self, f.name))


class DatasheetHandle:
    """Imperative handle a host keeps on one grid instance."""

    def __init__(self, controller: InteractionController) -> None:
        self._controller = controller

    @property
    def editing(self) -> bool:
        return self._controller.state.editing is not None

    @property
    def editing_position(self) -> Position | None:
        return self._controller.state.editing

    @property
    def edit_session(self) -> EditSession | None:
        return self._controller.edit_session

    @property
    def selected_rows(self) -> list[int]:
        return self._controller.calculated.selected_rows

    @property
    def selected_cells(self) -> Range[Position] | None:
        return self._controller.calculated.selected_cells

    def clear_selection(self) -> None:
        self._controller.clear_selection()

    def end_editing(self) -> None:
        self._controller.end_editing()

    def __repr__(self) -> str:
        return (
            f"DatasheetHandle(editing={self.editing}, "
            f"rows={len(self.selected_rows)}, cells={self.selected_cells})"
        )


@dataclass
class _ColumnResize:
    col: int
    start_x: float
    start_width: float


def parent_chain_contains(container: Any, node: Any) -> bool:
    """Default descendant test: follow ``node.parent`` links up to the root."""
    while node is not None:
        if node is container:
            return True
        node = getattr(node, "parent", None)
    return False


class InteractionController:
    """Translates grid input into SelectionState transitions.

    Parameters
    ----------
    options : DatasheetOptions
        Data bounds, editability and export settings.
    callbacks : DatasheetCallbacks, optional
    codec : ClipboardCodec, optional
        Encoders used on copy. Defaults to TSV/HTML/JSON.
    clipboard : object with ``write(items)``, optional
        Written by the copy shortcut; a ``Copy`` message may carry its own.
    scheduler : object with ``call_soon(fn)``, optional
        Runs the deferred selection-changed notification.
    container : object, optional
        The grid's root node, for click-outside detection.
    is_descendant_of : callable(container, node) -> bool, optional
    """

    def __init__(
        self,
        options: DatasheetOptions,
        callbacks: DatasheetCallbacks | None = None,
        codec: ClipboardCodec | None = None,
        clipboard: Any = None,
        scheduler: Any = None,
        container: Any = None,
        is_descendant_of: Callable[[Any, Any], bool] | None = None,
    ) -> None:
        self.options = options
        self.callbacks = callbacks or DatasheetCallbacks()
        self.codec = codec or ClipboardCodec()
        self.clipboard = clipboard if clipboard is not None else MemoryClipboard()
        self.scheduler = scheduler or TickScheduler()
        self.container = container
        self.is_descendant_of = is_descendant_of or parent_chain_contains
        self.state = SelectionState()
        self.handle = DatasheetHandle(self)
        self.edit_session: EditSession | None = None
        self._resize: _ColumnResize | None = None
        self._events: EventSource | None = None
        self._handlers: dict[type, Callable[[Any], None]] = {
            PointerDown: self._on_pointer_down,
            PointerMove: self._on_pointer_move,
            PointerUp: self._on_pointer_up,
            DocumentPointerDown: self._on_document_pointer_down,
            DoubleClick: self._on_double_click,
            KeyDown: self._on_key_down,
            Copy: self._on_copy,
            Paste: self._on_paste,
            ColumnResizeStart: self._on_column_resize_start,
        }

    # ── Derived state ──

    @property
    def calculated(self) -> CalculatedState:
        return calculate(self.state)

    @property
    def mode(self) -> Mode:
        if self.state.editing is not None:
            return Mode.EDITING
        if self.state.select_rows is not None:
            return Mode.DRAGGING_ROWS
        if self.state.has_transient_cells:
            return Mode.DRAGGING_CELLS
        return Mode.IDLE

    @property
    def resizing(self) -> bool:
        return self._resize is not None

    # ── Imperative API ──

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def end_editing(self) -> None:
        """Drop the editing position without notifying the host."""
        self.state.end_editing()
        self.edit_session = None

    # ── Listener lifecycle ──

    def attach(self, events: EventSource) -> None:
        """Install the document listener used for click-outside detection.

        Installed at most once per controller.
        """
        if self._events is events:
            return
        if self._events is not None:
            self.detach()
        events.add_listener(DOCUMENT_POINTER_DOWN, self.dispatch)
        self._events = events

    def detach(self) -> None:
        if self._events is None:
            return
        self._events.remove_listener(DOCUMENT_POINTER_DOWN, self.dispatch)
        self._events = None

    # ── Reducer ──

    def dispatch(self, event: GridEvent) -> None:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported grid event: {type(event).__name__}")
        handler(event)

    # ── Pointer ──

    def _on_pointer_down(self, event: PointerDown) -> None:
        resolved = event.target.resolve() if event.target is not None else None
        if resolved is None:
            return
        row, col = resolved

        editing = self.state.editing
        if editing is not None:
            if col is not None and editing == Position(row, col):
                return
            self._resolve_edit()

        if not self.options.allow_selection:
            return

        state = self.state
        state.shift_key = event.shift_key
        state.meta_key = event.meta_key
        if col is None:
            state.clear_transient_cells()
            state.select_rows = Range(row, row)
        else:
            state.select_rows = None
            state.select_start = Position(row, col)
            state.select_end = Position(row, col)
        logger.debug("Pointer down at row=%s col=%s, mode=%s", row, col, self.mode.value)

    def _on_pointer_move(self, event: PointerMove) -> None:
        if self._resize is not None:
            if event.client_x is not None:
                self._resize_to(event.client_x)
            return
        if event.buttons != PRIMARY_BUTTON:
            return
        resolved = event.target.resolve() if event.target is not None else None
        if resolved is None:
            return
        row, col = resolved

        state = self.state
        if col is None:
            if state.select_rows is None:
                return
            state.clear_transient_cells()
            state.select_rows = Range(state.select_rows.start, row)
        else:
            if state.select_start is None:
                return
            state.select_rows = None
            state.select_end = Position(row, col)
        state.shift_key = event.shift_key
        state.meta_key = event.meta_key

    def _on_pointer_up(self, event: PointerUp) -> None:
        if self._resize is not None:
            if event.client_x is not None:
                self._resize_to(event.client_x)
            self._resize = None
            return

        state = self.state
        if state.select_rows is None and not state.has_transient_cells:
            return

        calc = calculate(state)
        if state.select_rows is not None:
            state.selected_rows = calc.selecting_rows
            state.selected_cells = None
        else:
            state.selected_cells = calc.selecting_cells
            state.selected_rows = []
        state.clear_transient()
        logger.debug(
            "Committed selection rows=%s cells=%s",
            state.selected_rows, state.selected_cells,
        )
        self._schedule_selection_changed()

    def _on_document_pointer_down(self, event: DocumentPointerDown) -> None:
        if self.container is None:
            return
        if self.is_descendant_of(self.container, event.node):
            return
        had_selection = self.state.has_selection
        if not had_selection and self.state.editing is None:
            return
        self._resolve_edit()
        self.state.clear_selection()
        logger.debug("Pointer down outside grid, selection cleared")
        if had_selection:
            self._schedule_selection_changed()

    def _on_double_click(self, event: DoubleClick) -> None:
        resolved = event.target.resolve() if event.target is not None else None
        if resolved is None or resolved[1] is None:
            return
        row, col = resolved
        if not self.options.can_edit(row, col):
            return
        position = Position(row, col)
        if self.state.editing == position:
            return
        session = EditSession(
            position,
            self.options.value_at(row, col),
            structured=self.options.edit_as_literal,
        )
        self._resolve_edit()

        had_selection = self.state.has_selection
        self.state.clear_selection()
        self.state.editing = position
        self.edit_session = session
        logger.debug("Start editing row=%d col=%d", row, col)
        if self.callbacks.on_start_editing is not None:
            self.callbacks.on_start_editing(row, col, self.handle)
        if had_selection:
            self._schedule_selection_changed()

    # ── Column resize ──

    def _on_column_resize_start(self, event: ColumnResizeStart) -> None:
        if not 0 <= event.col < self.options.n_cols:
            return
        self._resize = _ColumnResize(
            col=event.col,
            start_x=event.client_x,
            start_width=self.options.width_of(event.col),
        )

    def _resize_to(self, client_x: float) -> None:
        resize = self._resize
        width = max(
            float(self.options.column_min_width),
            resize.start_width + (client_x - resize.start_x),
        )
        if self.callbacks.on_column_width_change is not None:
            self.callbacks.on_column_width_change(resize.col, width, self.handle)

    # ── Keyboard & clipboard ──

    def _on_key_down(self, event: KeyDown) -> None:
        if self.state.editing is not None:
            if event.key == "Escape":
                if self.edit_session is not None:
                    self.edit_session.cancel()
                self._resolve_edit()
            elif event.key == "Enter" and not event.shift_key:
                self._resolve_edit()
            return

        if event.key in DELETE_KEYS:
            self._delete_selection()
        elif event.command and event.key.lower() == "c":
            self._copy_selection(self.clipboard)
        elif event.command and event.key.lower() == "v":
            self._paste_selection(self.clipboard)

    def _on_copy(self, event: Copy) -> None:
        if self.state.editing is not None:
            return
        clipboard = event.clipboard if event.clipboard is not None else self.clipboard
        self._copy_selection(clipboard)

    def _on_paste(self, event: Paste) -> None:
        if self.state.editing is not None:
            return
        clipboard = event.clipboard if event.clipboard is not None else self.clipboard
        self._paste_selection(clipboard)

    def _target_rows(self, limit: int) -> list[int]:
        return filter_rows(self.state.selected_rows, limit)

    def _target_cells(self, n_rows: int) -> Range[Position] | None:
        return clip_rect(self.state.selected_cells, n_rows, self.options.n_cols)

    def _delete_selection(self) -> None:
        rows = self._target_rows(self.options.n_rows)
        if rows and self.callbacks.on_delete_rows is not None:
            logger.debug("Deleting rows %s", rows)
            self.callbacks.on_delete_rows(rows, self.handle)
        cells = self._target_cells(self.options.n_rows)
        if cells is not None and self.callbacks.on_delete_cells is not None:
            logger.debug("Deleting cells %s", cells)
            self.callbacks.on_delete_cells(cells, self.handle)

    def _export(self, rows: list[int], cols: list[int], clipboard: Any) -> None:
        self.codec.export(self.options.export_matrix(rows, cols), clipboard)

    def _copy_selection(self, clipboard: Any) -> None:
        frame = self.options.frame
        rows = self._target_rows(self.options.n_rows)
        if rows:
            self._export(rows, list(range(self.options.n_cols)), clipboard)
            if self.callbacks.on_copy_rows is not None:
                self.callbacks.on_copy_rows(rows, frame.iloc[rows], self.handle)
            return
        cells = self._target_cells(self.options.n_rows)
        if cells is None:
            return
        row_range = list(range(cells.start.row, cells.end.row + 1))
        col_range = list(range(cells.start.col, cells.end.col + 1))
        self._export(row_range, col_range, clipboard)
        if self.callbacks.on_copy_cells is not None:
            block = frame.iloc[row_range, col_range]
            self.callbacks.on_copy_cells(cells, block, self.handle)

    def _paste_selection(self, clipboard: Any) -> None:
        limit = self.options.row_limit
        rows = self._target_rows(limit)
        if rows:
            if self.callbacks.on_paste_rows is not None:
                self.callbacks.on_paste_rows(rows, clipboard, self.handle)
            return
        cells = self._target_cells(limit)
        if cells is not None and self.callbacks.on_paste_cells is not None:
            self.callbacks.on_paste_cells(cells, clipboard, self.handle)

    # ── Helpers ──

    def _resolve_edit(self) -> None:
        """Close the current edit, notifying the host first."""
        position = self.state.editing
        if position is None:
            return
        logger.debug("End editing row=%d col=%d", position.row, position.col)
        try:
            if self.callbacks.on_end_editing is not None:
                self.callbacks.on_end_editing(position.row, position.col, self.handle)
        finally:
            self.end_editing()

    def _schedule_selection_changed(self) -> None:
        self.scheduler.call_soon(self._notify_selection_changed)

    def _notify_selection_changed(self) -> None:
        if self.callbacks.on_selection_changed is not None:
            self.callbacks.on_selection_changed()

    def __repr__(self) -> str:
        return f"InteractionController(mode={self.mode.value}, state={self.state})"
