"""Trusted and authoritative plugins, plus per-run reconciliation settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final

from waterseams.domain.model import COMPRESSED_FLAG, FaultIsolation, ModKey

from .errors import ConfigurationError

SKYRIM_ESM: Final[ModKey] = ModKey("Skyrim.esm")
UPDATE_ESM: Final[ModKey] = ModKey("Update.esm")
DAWNGUARD_ESM: Final[ModKey] = ModKey("Dawnguard.esm")
HEARTHFIRES_ESM: Final[ModKey] = ModKey("HearthFires.esm")
DRAGONBORN_ESM: Final[ModKey] = ModKey("Dragonborn.esm")
USSEP: Final[ModKey] = ModKey("Unofficial Skyrim Special Edition Patch.esp")

DEFAULT_TRUSTED_SOURCES: Final[frozenset[ModKey]] = frozenset(
    {SKYRIM_ESM, UPDATE_ESM, DAWNGUARD_ESM, HEARTHFIRES_ESM, DRAGONBORN_ESM, USSEP}
)
# Community patch first: it refines everything the official update fixed.
DEFAULT_AUTHORITY_SOURCES: Final[tuple[ModKey, ...]] = (USSEP, UPDATE_ESM)
DEFAULT_PATCH_NAME: Final[str] = "WaterSeamsFix.esp"

PATCH_NAME_ENV: Final[str] = "WATERSEAMS_PATCH_NAME"
FAULT_ISOLATION_ENV: Final[str] = "WATERSEAMS_FAULT_ISOLATION"


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    """Immutable settings handed to the reconciliation engine."""

    trusted_sources: frozenset[ModKey] = DEFAULT_TRUSTED_SOURCES
    authority_sources: tuple[ModKey, ...] = DEFAULT_AUTHORITY_SOURCES
    patch_mod: ModKey = field(default_factory=lambda: ModKey(DEFAULT_PATCH_NAME))
    fault_isolation: FaultIsolation = FaultIsolation.PLUGIN
    compression_flag: int = COMPRESSED_FLAG

    def __post_init__(self) -> None:
        if not self.authority_sources:
            raise ConfigurationError("At least one authority source is required")
        if len(set(self.authority_sources)) != len(self.authority_sources):
            raise ConfigurationError("Authority sources must not repeat")
        if self.patch_mod in self.trusted_sources:
            raise ConfigurationError(f"Patch plugin cannot be a trusted source: {self.patch_mod}")

    def is_trusted(self, mod: ModKey) -> bool:
        return mod in self.trusted_sources


def get_reconcile_config() -> ReconcileConfig:
    patch_name = os.getenv(PATCH_NAME_ENV, "").strip() or DEFAULT_PATCH_NAME
    raw_isolation = os.getenv(FAULT_ISOLATION_ENV, "").strip().lower()
    try:
        patch_mod = ModKey(patch_name)
        isolation = FaultIsolation(raw_isolation) if raw_isolation else FaultIsolation.PLUGIN
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    return ReconcileConfig(patch_mod=patch_mod, fault_isolation=isolation)
