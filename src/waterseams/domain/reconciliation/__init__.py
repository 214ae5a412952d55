"""Override resolution and truth reconciliation for cell water references.

Layered flow:
1) resolve the winning definition of each record under last-writer-wins
2) select the authoritative definition from a fixed trust ranking
3) patch winners that disagree with the authority into the output layer
4) clear compression flags on the output layer
"""

from __future__ import annotations

from .compare import references_differ, water_needs_patch
from .decompress import decompress_overrides
from .engine import ReconciliationEngine
from .errors import (
    CorruptDefinitionError,
    FileProcessingError,
    MissingAuthorityError,
    ReconciliationError,
    UnresolvableIdentityError,
)
from .report import PatchRecord, ReconciliationReport, SkippedPlugin, SkippedRecord
from .resolve import OverrideResolver
from .truth import TruthSelector

__all__ = [
    "CorruptDefinitionError",
    "FileProcessingError",
    "MissingAuthorityError",
    "OverrideResolver",
    "PatchRecord",
    "ReconciliationEngine",
    "ReconciliationError",
    "ReconciliationReport",
    "SkippedPlugin",
    "SkippedRecord",
    "TruthSelector",
    "UnresolvableIdentityError",
    "decompress_overrides",
    "references_differ",
    "water_needs_patch",
]
