"""datasheet: selection, editing and clipboard core for spreadsheet-like grids."""

from ._version import __version__
from .logging_utils import configure_logging
from .core import Position, Range, SelectionState, calculate
from .export import ClipboardCodec, MemoryClipboard
from .widget import (
    Datasheet,
    DatasheetCallbacks,
    DatasheetHandle,
    DatasheetOptions,
    InteractionController,
)
from .widget.events import (
    CellTarget,
    ColumnResizeStart,
    Copy,
    DocumentPointerDown,
    DoubleClick,
    EventSource,
    KeyDown,
    Paste,
    PointerDown,
    PointerMove,
    PointerUp,
)

__all__ = [
    "__version__",
    "configure_logging",
    "Position",
    "Range",
    "SelectionState",
    "calculate",
    "ClipboardCodec",
    "MemoryClipboard",
    "Datasheet",
    "DatasheetCallbacks",
    "DatasheetHandle",
    "DatasheetOptions",
    "InteractionController",
    "CellTarget",
    "ColumnResizeStart",
    "Copy",
    "DocumentPointerDown",
    "DoubleClick",
    "EventSource",
    "KeyDown",
    "Paste",
    "PointerDown",
    "PointerMove",
    "PointerUp",
]
