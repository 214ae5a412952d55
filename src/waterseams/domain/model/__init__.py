"""Public domain model surface."""

from __future__ import annotations

from waterseams.domain.model.enums import FaultIsolation, ReconciliationOutcome
from waterseams.domain.model.keys import MAX_LOCAL_ID, PLUGIN_EXTENSIONS, FormKey, ModKey
from waterseams.domain.model.load_order import LoadOrder
from waterseams.domain.model.patch import PatchLayer
from waterseams.domain.model.records import COMPRESSED_FLAG, CellDefinition, CellOverride

__all__ = [
    "COMPRESSED_FLAG",
    "MAX_LOCAL_ID",
    "PLUGIN_EXTENSIONS",
    "CellDefinition",
    "CellOverride",
    "FaultIsolation",
    "FormKey",
    "LoadOrder",
    "ModKey",
    "PatchLayer",
    "ReconciliationOutcome",
]
