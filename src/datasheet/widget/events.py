"""Input messages the interaction controller understands.

Every raw pointer, keyboard and clipboard event a host forwards is one of
the frozen dataclasses below; :class:`InteractionController.dispatch`
switches on the type.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Union

from ..core.validation import validate_cell_index

PRIMARY_BUTTON = 1


@dataclass(frozen=True)
class CellTarget:
    """The row/col markers carried by the element an event landed on.

    Markers are kept raw (a DOM dataset hands over strings) and resolved
    lazily. A row-number cell has a row marker but no col marker.
    """

    row: Any = None
    col: Any = None

    def resolve(self) -> tuple[int, int | None] | None:
        return validate_cell_index(self.row, self.col)


@dataclass(frozen=True)
class PointerDown:
    target: CellTarget | None
    shift_key: bool = False
    meta_key: bool = False


@dataclass(frozen=True)
class PointerMove:
    """Pointer moved over ``target``.

    ``buttons`` is the pressed-button bitmask; only ``PRIMARY_BUTTON``
    extends a drag.
    """

    target: CellTarget | None
    buttons: int = PRIMARY_BUTTON
    shift_key: bool = False
    meta_key: bool = False
    client_x: float | None = None


@dataclass(frozen=True)
class PointerUp:
    client_x: float | None = None


@dataclass(frozen=True)
class DocumentPointerDown:
    """Pointer pressed anywhere in the document; ``node`` is the raw target."""

    node: Any


@dataclass(frozen=True)
class DoubleClick:
    target: CellTarget | None


@dataclass(frozen=True)
class KeyDown:
    key: str
    shift_key: bool = False
    meta_key: bool = False
    ctrl_key: bool = False

    @property
    def command(self) -> bool:
        """True when the platform command modifier (Ctrl or Cmd) is held."""
        return self.meta_key or self.ctrl_key


@dataclass(frozen=True)
class Copy:
    """Copy requested; ``clipboard`` overrides the controller's default."""

    clipboard: Any = None


@dataclass(frozen=True)
class Paste:
    clipboard: Any = None


@dataclass(frozen=True)
class ColumnResizeStart:
    col: int
    client_x: float


GridEvent = Union[
    PointerDown,
    PointerMove,
    PointerUp,
    DocumentPointerDown,
    DoubleClick,
    KeyDown,
    Copy,
    Paste,
    ColumnResizeStart,
]

Listener = Callable[[Any], Any]


class EventSource:
    """Listener registry for document-wide events.

    Stands in for ``document.addEventListener`` so controllers can detect
    pointer presses outside their grid.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def add_listener(self, kind: str, listener: Listener) -> None:
        self._listeners[kind].append(listener)

    def remove_listener(self, kind: str, listener: Listener) -> None:
        listeners = self._listeners.get(kind, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, kind: str) -> int:
        return len(self._listeners.get(kind, []))

    def emit(self, kind: str, event: Any) -> None:
        for listener in list(self._listeners.get(kind, [])):
            listener(event)

    def __repr__(self) -> str:
        counts = {k: len(v) for k, v in self._listeners.items() if v}
        return f"EventSource({counts})"
