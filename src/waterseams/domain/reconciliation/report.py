"""Structured outcome of one reconciliation run.

Everything a front end needs to render a summary lives here as plain data; no
formatting decisions are made in this module beyond the terminal message.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from waterseams.domain.model import ReconciliationOutcome

if TYPE_CHECKING:
    from waterseams.domain.model import FormKey, ModKey

NO_PATCHES_MESSAGE = "No patches needed - water data is correct."
PATCHES_APPLIED_MESSAGE = "Patches applied. Place the patch plugin after your water mods."


@dataclass(frozen=True, slots=True)
class PatchRecord:
    """One corrected cell, attributed to the plugin whose value lost."""

    form_key: FormKey
    plugin: ModKey
    previous_water: FormKey | None
    water: FormKey | None


@dataclass(frozen=True, slots=True)
class SkippedPlugin:
    plugin: ModKey
    reason: str


@dataclass(frozen=True, slots=True)
class SkippedRecord:
    form_key: FormKey
    plugin: ModKey
    reason: str


@dataclass(slots=True)
class ReconciliationReport:
    authorities_present: tuple[ModKey, ...] = ()
    patches: list[PatchRecord] = field(default_factory=list[PatchRecord])
    decompressed: int = 0
    skipped_plugins: list[SkippedPlugin] = field(default_factory=list[SkippedPlugin])
    skipped_records: list[SkippedRecord] = field(default_factory=list[SkippedRecord])

    def record_patch(self, patch: PatchRecord) -> None:
        self.patches.append(patch)

    def record_skipped_plugin(self, plugin: ModKey, reason: str) -> None:
        self.skipped_plugins.append(SkippedPlugin(plugin=plugin, reason=reason))

    def record_skipped_record(self, form_key: FormKey, plugin: ModKey, reason: str) -> None:
        self.skipped_records.append(SkippedRecord(form_key=form_key, plugin=plugin, reason=reason))

    @property
    def patches_by_plugin(self) -> dict[str, int]:
        """Patch counts keyed by plugin name, largest first."""

        counts = Counter(str(patch.plugin) for patch in self.patches)
        return dict(counts.most_common())

    @property
    def total_patched(self) -> int:
        return len(self.patches)

    @property
    def skipped_plugin_names(self) -> tuple[str, ...]:
        return tuple(str(skipped.plugin) for skipped in self.skipped_plugins)

    @property
    def skipped_form_keys(self) -> frozenset[FormKey]:
        return frozenset(skipped.form_key for skipped in self.skipped_records)

    @property
    def error_count(self) -> int:
        return len(self.skipped_plugins) + len(self.skipped_records)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def outcome(self) -> ReconciliationOutcome:
        if self.patches:
            return ReconciliationOutcome.PATCHES_APPLIED
        return ReconciliationOutcome.NO_PATCHES_NEEDED

    @property
    def summary_message(self) -> str:
        if self.outcome is ReconciliationOutcome.PATCHES_APPLIED:
            return PATCHES_APPLIED_MESSAGE
        return NO_PATCHES_MESSAGE
