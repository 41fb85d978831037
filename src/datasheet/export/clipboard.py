"""Clipboard codec: encode a block of cell values into named formats.

A copy writes every format at once, the way a browser ``ClipboardItem``
carries several MIME types. Each encoder is independent: one that raises
or returns something unusable is skipped, the others still land.
"""

from __future__ import annotations

import inspect
import json
import logging
import pathlib
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Union

import jinja2
import numpy as np
import pandas as pd

from ..core.value_codec import encode_value

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"
APPLICATION_JSON = "application/json"


@dataclass(frozen=True)
class Blob:
    """Binary clipboard payload."""

    data: bytes
    mime_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)


Payload = Union[str, bytes, bytearray, Blob]
Matrix = list[list[Any]]
Encoder = Callable[[Matrix], Any]


def is_payload(value: Any) -> bool:
    """True for values a clipboard write accepts: text or blob-like."""
    return isinstance(value, (str, bytes, bytearray, Blob))


def encode_cell(value: Any) -> Any:
    """Default per-cell conversion applied before encoding.

    Scalars pass through; structured values become one-line literals so
    they survive a round trip through a spreadsheet.
    """
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (dict, list, tuple, Decimal, datetime)):
        return encode_value(value, indent=0)
    return value


def encode_tsv(matrix: Matrix) -> str:
    """Tab/newline delimited text, quoted where a cell contains a delimiter."""
    if not matrix:
        return ""
    text = pd.DataFrame(matrix, dtype=object).to_csv(
        sep="\t", header=False, index=False, lineterminator="\n",
    )
    return text[:-1] if text.endswith("\n") else text


def _render_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and np.isnan(value):
        return ""
    return str(value)


_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def encode_html(matrix: Matrix) -> str:
    """An HTML table; spreadsheet tools paste it cell by cell."""
    template = _env.get_template("table.html.j2")
    rows = [[_render_cell(v) for v in row] for row in matrix]
    return template.render(rows=rows)


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(matrix: Matrix) -> str:
    return json.dumps(matrix, default=_json_default)


DEFAULT_ENCODERS: tuple[tuple[str, Encoder], ...] = (
    (TEXT_PLAIN, encode_tsv),
    (TEXT_HTML, encode_html),
    (APPLICATION_JSON, encode_json),
)


class MemoryClipboard:
    """In-process clipboard. Each :meth:`write` replaces the contents."""

    def __init__(self) -> None:
        self._items: dict[str, Payload] = {}
        self.write_count = 0

    def write(self, items: Mapping[str, Payload]) -> None:
        self._items = dict(items)
        self.write_count += 1

    def read(self, format_name: str) -> Payload | None:
        return self._items.get(format_name)

    def read_text(self) -> str:
        value = self._items.get(TEXT_PLAIN, "")
        return value if isinstance(value, str) else ""

    @property
    def formats(self) -> list[str]:
        return list(self._items)

    def __repr__(self) -> str:
        return f"MemoryClipboard(formats={self.formats})"


def _normalize_encoders(
    encoders: Mapping[str, Encoder] | Iterable[tuple[str, Encoder]] | None,
) -> list[tuple[str, Encoder]]:
    if encoders is None:
        return list(DEFAULT_ENCODERS)
    pairs = list(encoders.items()) if isinstance(encoders, Mapping) else list(encoders)
    for name, encoder in pairs:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Clipboard format names must be non-empty strings, got {name!r}.")
        if not callable(encoder):
            raise TypeError(f"Encoder for '{name}' must be callable.")
    return pairs


class ClipboardCodec:
    """Ordered set of named encoders.

    Parameters
    ----------
    encoders : mapping or list of (format_name, encoder) pairs, optional
        Defaults to TSV, HTML and JSON.
    include_defaults : bool
        When custom encoders are given, also keep the default formats
        they don't override.
    """

    def __init__(
        self,
        encoders: Mapping[str, Encoder] | Iterable[tuple[str, Encoder]] | None = None,
        include_defaults: bool = False,
    ) -> None:
        pairs = _normalize_encoders(encoders)
        if encoders is not None and include_defaults:
            names = {name for name, _ in pairs}
            pairs = [p for p in DEFAULT_ENCODERS if p[0] not in names] + pairs
        self._encoders = pairs

    @property
    def format_names(self) -> list[str]:
        return [name for name, _ in self._encoders]

    def _run(self, name: str, encoder: Encoder, matrix: Matrix) -> Any:
        try:
            return encoder(matrix)
        except Exception:
            logger.debug("Clipboard encoder for '%s' failed, skipping", name, exc_info=True)
            return None

    def _accept(self, items: dict[str, Payload], name: str, result: Any) -> None:
        if is_payload(result):
            items[name] = result
        elif result is not None:
            logger.debug(
                "Clipboard encoder for '%s' returned %s, skipping",
                name, type(result).__name__,
            )

    def encode(self, matrix: Matrix) -> dict[str, Payload]:
        """Run every encoder, keeping the payloads that came out usable."""
        items: dict[str, Payload] = {}
        for name, encoder in self._encoders:
            result = self._run(name, encoder, matrix)
            if inspect.isawaitable(result):
                # Coroutine encoders need export_async.
                close = getattr(result, "close", None)
                if close is not None:
                    close()
                logger.debug("Clipboard encoder for '%s' is async, skipping", name)
                continue
            self._accept(items, name, result)
        return items

    async def encode_async(self, matrix: Matrix) -> dict[str, Payload]:
        """Like :meth:`encode`, awaiting encoders that return awaitables."""
        items: dict[str, Payload] = {}
        for name, encoder in self._encoders:
            result = self._run(name, encoder, matrix)
            if inspect.isawaitable(result):
                try:
                    result = await result
                except Exception:
                    logger.debug("Clipboard encoder for '%s' failed, skipping", name, exc_info=True)
                    continue
            self._accept(items, name, result)
        return items

    def export(self, matrix: Matrix, clipboard: Any) -> dict[str, Payload]:
        """Encode ``matrix`` and write all payloads in one clipboard write."""
        items = self.encode(matrix)
        clipboard.write(items)
        logger.debug("Wrote %d clipboard format(s): %s", len(items), list(items))
        return items

    async def export_async(self, matrix: Matrix, clipboard: Any) -> dict[str, Payload]:
        items = await self.encode_async(matrix)
        result = clipboard.write(items)
        if inspect.isawaitable(result):
            await result
        return items

    def __repr__(self) -> str:
        return f"ClipboardCodec(formats={self.format_names})"
