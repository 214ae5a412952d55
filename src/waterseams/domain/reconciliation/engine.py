"""Reconciliation scan over a whole load order.

Every non-trusted plugin is visited in priority order and each cell it defines
is checked only when that plugin currently wins the record, so every identity is
examined exactly once. Per record the state machine is::

    DISCOVERED -> winner is trusted   -> SKIPPED
               -> no truth available  -> SKIPPED
               -> truth == winner     -> SKIPPED
               -> truth != winner     -> PATCHED

Identities that cannot be resolved or decoded are skipped on their own. Any
other fault is contained at the granularity chosen by ``FaultIsolation``. After the
scan, compression flags are cleared on everything in the output layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from waterseams.domain.model import FaultIsolation

from .compare import water_needs_patch
from .decompress import decompress_overrides
from .errors import (
    CorruptDefinitionError,
    FileProcessingError,
    MissingAuthorityError,
    UnresolvableIdentityError,
)
from .report import PatchRecord, ReconciliationReport
from .resolve import OverrideResolver
from .truth import TruthSelector

if TYPE_CHECKING:
    from waterseams.config import ReconcileConfig
    from waterseams.domain.model import FormKey, ModKey
    from waterseams.domain.ports import OutputLayer, RecordIndex

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Patch cells whose winning water reference disagrees with the authorities."""

    index: RecordIndex
    output: OutputLayer
    config: ReconcileConfig
    resolver: OverrideResolver = field(init=False)
    truth: TruthSelector = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = OverrideResolver(self.index)
        self.truth = TruthSelector(self.resolver, self.config.authority_sources)

    def reconcile(self) -> ReconciliationReport:
        load_order = self.index.load_order
        present = tuple(mod for mod in self.config.authority_sources if mod in load_order)
        if not present:
            raise MissingAuthorityError(self.config.authority_sources)

        for authority in self.config.authority_sources:
            log.info("Authority %s: %s", authority, "OK" if authority in present else "missing")

        report = ReconciliationReport(authorities_present=present)
        for mod in load_order:
            if self.config.is_trusted(mod):
                continue
            try:
                self._scan_plugin(mod, report)
            except FileProcessingError as exc:
                log.warning("%s", exc)
                report.record_skipped_plugin(mod, exc.reason)

        report.decompressed = decompress_overrides(
            self.output, flag=self.config.compression_flag
        )
        log.info(
            "Reconciliation finished: patched=%s, decompressed=%s, skipped_plugins=%s",
            report.total_patched,
            report.decompressed,
            len(report.skipped_plugins),
        )
        return report

    def _scan_plugin(self, mod: ModKey, report: ReconciliationReport) -> None:
        isolate_records = self.config.fault_isolation is FaultIsolation.RECORD
        try:
            for form_key in self.index.form_keys(mod):
                if isolate_records:
                    self._reconcile_isolated(mod, form_key, report)
                else:
                    self._reconcile_record(mod, form_key, report)
        except Exception as exc:
            raise FileProcessingError(mod, str(exc) or type(exc).__name__) from exc

    def _reconcile_isolated(
        self, mod: ModKey, form_key: FormKey, report: ReconciliationReport
    ) -> None:
        try:
            self._reconcile_record(mod, form_key, report)
        except Exception as exc:  # noqa: BLE001
            log.warning("Skipping %s in %s: %s", form_key, mod, exc)
            report.record_skipped_record(form_key, mod, str(exc) or type(exc).__name__)

    def _reconcile_record(
        self, mod: ModKey, form_key: FormKey, report: ReconciliationReport
    ) -> None:
        try:
            winner = self.resolver.winning_definition(form_key)
        except UnresolvableIdentityError as exc:
            log.debug("%s", exc)
            report.record_skipped_record(form_key, mod, str(exc))
            return
        except CorruptDefinitionError as exc:
            if form_key not in report.skipped_form_keys:
                log.warning("Leaving %s untouched: %s", form_key, exc)
                report.record_skipped_record(form_key, mod, str(exc))
            return
        if winner.origin != mod:
            return

        truth = self.truth.select_truth(form_key)
        if truth is None or not water_needs_patch(truth, winner):
            return

        override = self.output.get_or_add_override(winner)
        override.set_water(truth.water)
        report.record_patch(
            PatchRecord(
                form_key=form_key,
                plugin=winner.origin,
                previous_water=winner.water,
                water=truth.water,
            )
        )
        log.debug(
            "Patched %s from %s: water %s -> %s (truth from %s)",
            form_key,
            mod,
            winner.water,
            truth.water,
            truth.origin,
        )
