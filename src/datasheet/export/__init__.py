"""Clipboard export formats."""

from .clipboard import Blob, ClipboardCodec, MemoryClipboard, encode_html, encode_json, encode_tsv

__all__ = [
    "Blob",
    "ClipboardCodec",
    "MemoryClipboard",
    "encode_html",
    "encode_json",
    "encode_tsv",
]
