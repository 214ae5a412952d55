"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from waterseams.adapters.loadorder_json import (
    JsonRecordIndex,
    plugins_from_document,
    read_document,
    write_patch_layer,
)
from waterseams.adapters.sqlalchemy import (
    SqlAlchemyRecordIndex,
    SqlAlchemyUnitOfWork,
    import_plugins,
    is_started,
    startup,
    store_patch_layer,
)
from waterseams.config import get_reconcile_config
from waterseams.domain.model import PatchLayer
from waterseams.domain.reconciliation import ReconciliationEngine

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from waterseams.config import ReconcileConfig
    from waterseams.domain.ports import RecordIndex
    from waterseams.domain.reconciliation import ReconciliationReport

UnitOfWorkFactory = Callable[[], SqlAlchemyUnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationResult:
    """Patch layer and report of one run, plus where the patch was written."""

    patch: PatchLayer
    report: ReconciliationReport
    output_path: Path | None = None


def reconcile_water_seams(
    index: RecordIndex,
    *,
    config: ReconcileConfig | None = None,
) -> ReconciliationResult:
    """Run the reconciliation engine against ``index`` into a fresh patch layer."""

    effective_config = config or get_reconcile_config()
    patch = PatchLayer(effective_config.patch_mod)
    log.info(
        "Starting water seams reconciliation: plugins=%s, patch=%s, isolation=%s",
        len(index.load_order),
        patch.mod,
        effective_config.fault_isolation,
    )
    engine = ReconciliationEngine(index=index, output=patch, config=effective_config)
    return ReconciliationResult(patch=patch, report=engine.reconcile())


def reconcile_load_order_files(
    input_paths: Sequence[Path],
    *,
    output_path: Path,
    config: ReconcileConfig | None = None,
) -> ReconciliationResult:
    """Reconcile the plugins of one or more dump files, concatenated in order."""

    index = JsonRecordIndex.from_paths(input_paths)
    result = reconcile_water_seams(index, config=config)
    result.output_path = write_patch_layer(result.patch, output_path)
    log.info("Wrote %s overrides to %s", len(result.patch), result.output_path)
    return result


def import_load_order_files(
    input_paths: Sequence[Path],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Replace the stored load order with the plugins of the given dump files."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    plugins = [
        plugin for path in input_paths for plugin in plugins_from_document(read_document(path))
    ]
    with effective_uow() as uow:
        stored = import_plugins(uow.session, plugins)
        uow.commit()
    log.info("Imported %s plugins", stored)
    return stored


def reconcile_database(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ReconcileConfig | None = None,
    store_patch: bool = True,
) -> ReconciliationResult:
    """Reconcile the stored load order; the patch replaces any stored earlier copy."""

    effective_config = config or get_reconcile_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        index = SqlAlchemyRecordIndex(uow.session, exclude=(effective_config.patch_mod,))
        result = reconcile_water_seams(index, config=effective_config)
        if store_patch:
            store_patch_layer(uow.session, result.patch)
            uow.commit()
    return result


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork
