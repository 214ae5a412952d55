"""Domain port definitions for adapters."""

from __future__ import annotations

from .output import OutputLayer
from .record_index import RecordIndex

__all__ = [
    "OutputLayer",
    "RecordIndex",
]
