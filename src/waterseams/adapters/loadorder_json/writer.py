"""Write a patch layer as a single-plugin load-order dump."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .schema import LoadOrderDocument
from .translator import plugin_payload

if TYPE_CHECKING:
    from pathlib import Path

    from waterseams.domain.model import PatchLayer


def patch_layer_document(layer: PatchLayer) -> LoadOrderDocument:
    return LoadOrderDocument(plugins=[plugin_payload(layer)])


def write_patch_layer(layer: PatchLayer, path: Path) -> Path:
    """Serialize ``layer`` so it can be appended to the load order it patches."""

    document = patch_layer_document(layer)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    return path
