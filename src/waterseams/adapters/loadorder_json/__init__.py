"""Public interface for the load-order dump adapter."""

from __future__ import annotations

from .index import JsonRecordIndex, read_document
from .schema import CellPayload, LoadOrderDocument, PluginPayload
from .translator import parse_cell, plugins_from_document
from .writer import patch_layer_document, write_patch_layer

__all__ = [
    "CellPayload",
    "JsonRecordIndex",
    "LoadOrderDocument",
    "PluginPayload",
    "parse_cell",
    "patch_layer_document",
    "plugins_from_document",
    "read_document",
    "write_patch_layer",
]
