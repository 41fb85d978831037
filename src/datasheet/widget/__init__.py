"""Interaction controller, host options and the Datasheet façade."""

from .controller import DatasheetCallbacks, DatasheetHandle, InteractionController, Mode
from .datasheet import Datasheet
from .editing import EditSession
from .options import DatasheetOptions

__all__ = [
    "Datasheet",
    "DatasheetCallbacks",
    "DatasheetHandle",
    "DatasheetOptions",
    "EditSession",
    "InteractionController",
    "Mode",
]
