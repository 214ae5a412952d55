"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class FaultIsolation(StrEnum):
    """Granularity at which scan errors are contained."""

    PLUGIN = "plugin"
    RECORD = "record"


class ReconciliationOutcome(StrEnum):
    NO_PATCHES_NEEDED = "no_patches_needed"
    PATCHES_APPLIED = "patches_applied"
