from __future__ import annotations

import pytest

from waterseams.adapters.memory import PluginContents
from waterseams.config import ReconcileConfig
from waterseams.domain.model import (
    COMPRESSED_FLAG,
    FaultIsolation,
    FormKey,
    ModKey,
    ReconciliationOutcome,
)
from waterseams.domain.reconciliation import MissingAuthorityError
from waterseams.domain.reconciliation.report import NO_PATCHES_MESSAGE
from tests.helpers.plugins import (
    CELL,
    DAWNGUARD,
    MOD_A,
    MOD_B,
    OTHER_CELL,
    SKYRIM,
    UPDATE,
    USSEP,
    W1,
    W2,
    W3,
    FaultyRecordIndex,
    build_index,
    make_cell,
    plugin,
    run_engine,
    water_plugin,
)

BROKEN = ModKey("Broken.esp")
FIRST_CELL = FormKey(local_id=0x000E00, mod=SKYRIM)


def test_mod_reverting_community_patch_water_is_patched() -> None:
    index = build_index(
        water_plugin(SKYRIM, W2),
        water_plugin(UPDATE, W1),
        water_plugin(USSEP, W1),
        water_plugin(MOD_A, W2),
    )

    patch, report = run_engine(index)

    override = patch.override_for(CELL)
    assert override is not None
    assert override.water == W1
    assert report.patches_by_plugin == {"ModA.esp": 1}
    assert report.total_patched == 1
    assert report.outcome is ReconciliationOutcome.PATCHES_APPLIED
    assert report.authorities_present == (USSEP, UPDATE)


def test_official_update_is_truth_when_community_patch_absent() -> None:
    index = build_index(
        water_plugin(SKYRIM, W2), water_plugin(UPDATE, W1), water_plugin(MOD_A, W2)
    )

    patch, report = run_engine(index)

    override = patch.override_for(CELL)
    assert override is not None
    assert override.water == W1
    assert report.patches_by_plugin == {"ModA.esp": 1}
    assert report.authorities_present == (UPDATE,)


def test_matching_water_needs_no_patch() -> None:
    index = build_index(
        water_plugin(SKYRIM, W2), water_plugin(UPDATE, W1), water_plugin(MOD_A, W1)
    )

    patch, report = run_engine(index)

    assert len(patch) == 0
    assert report.total_patched == 0
    assert report.outcome is ReconciliationOutcome.NO_PATCHES_NEEDED
    assert report.summary_message == NO_PATCHES_MESSAGE


def test_trusted_winner_is_never_patched() -> None:
    index = build_index(
        water_plugin(SKYRIM, None),
        water_plugin(UPDATE, W1),
        water_plugin(MOD_A, W2),
        water_plugin(USSEP, W3),
    )
    # Update.esm ranks first, so the winning community patch disagrees with truth.
    config = ReconcileConfig(authority_sources=(UPDATE, USSEP))

    patch, report = run_engine(index, config)

    assert len(patch) == 0
    assert report.total_patched == 0


def test_trusted_master_winner_is_skipped_even_when_disagreeing_with_truth() -> None:
    index = build_index(
        water_plugin(SKYRIM, None),
        water_plugin(UPDATE, W1),
        water_plugin(MOD_A, W1),
        water_plugin(DAWNGUARD, W2),
    )

    patch, _report = run_engine(index)

    assert len(patch) == 0


def test_community_patch_takes_precedence_over_official_update() -> None:
    index = build_index(
        water_plugin(SKYRIM, None),
        water_plugin(USSEP, W3),
        water_plugin(UPDATE, W1),
        water_plugin(MOD_A, W2),
    )

    patch, _report = run_engine(index)

    override = patch.override_for(CELL)
    assert override is not None
    assert override.water == W3


@pytest.mark.parametrize(
    ("truth_water", "winning_water"),
    [(W1, None), (None, W2), (W1, W2)],
)
def test_mismatch_sets_exact_truth_state(
    truth_water: FormKey | None, winning_water: FormKey | None
) -> None:
    index = build_index(
        water_plugin(SKYRIM, W3),
        water_plugin(UPDATE, truth_water),
        water_plugin(MOD_A, winning_water),
    )

    patch, report = run_engine(index)

    override = patch.override_for(CELL)
    assert override is not None
    assert override.water == truth_water
    assert report.patches[0].previous_water == winning_water
    assert report.patches[0].water == truth_water


def test_both_empty_is_agreement() -> None:
    index = build_index(water_plugin(UPDATE, None), water_plugin(MOD_A, None))

    patch, _report = run_engine(index)

    assert len(patch) == 0


def test_record_without_truth_is_left_untouched() -> None:
    index = build_index(
        water_plugin(UPDATE, W1, form_key=OTHER_CELL),
        water_plugin(MOD_A, W2),
    )

    patch, report = run_engine(index)

    assert len(patch) == 0
    assert report.total_patched == 0


def test_each_record_is_patched_once_and_attributed_to_winner() -> None:
    index = build_index(
        water_plugin(UPDATE, W1),
        water_plugin(MOD_A, W2),
        water_plugin(MOD_B, W3),
    )

    patch, report = run_engine(index)

    assert len(patch) == 1
    assert report.patches_by_plugin == {"ModB.esp": 1}
    assert report.patches[0].previous_water == W3


def test_override_copies_winner_and_changes_only_water() -> None:
    winner = make_cell(MOD_A, water=W2, editor_id="RiftenExterior", attributes={"region": "Rift"})
    index = build_index(water_plugin(UPDATE, W1), plugin(MOD_A, winner))

    patch, _report = run_engine(index)

    override = patch.override_for(CELL)
    assert override is not None
    assert override.editor_id == "RiftenExterior"
    assert override.attributes == {"region": "Rift"}
    assert override.water == W1
    assert winner.water == W2


def test_second_run_with_patch_as_top_layer_is_idempotent() -> None:
    plugins = [
        water_plugin(SKYRIM, W2),
        water_plugin(UPDATE, W1),
        water_plugin(USSEP, W1, form_key=OTHER_CELL),
        plugin(
            MOD_A,
            make_cell(MOD_A, water=W2),
            make_cell(MOD_A, water=None, form_key=OTHER_CELL),
        ),
    ]
    first_patch, first_report = run_engine(build_index(*plugins))
    assert first_report.total_patched == 2

    second_patch, second_report = run_engine(
        build_index(*plugins, PluginContents.from_patch_layer(first_patch))
    )

    assert second_report.total_patched == 0
    assert len(second_patch) == 0


def test_missing_authorities_abort_before_scanning() -> None:
    index = build_index(water_plugin(SKYRIM, W1), water_plugin(MOD_A, W2))

    with pytest.raises(MissingAuthorityError, match="Update.esm"):
        run_engine(index)


def test_failing_plugin_is_skipped_and_others_still_patched() -> None:
    index = FaultyRecordIndex(
        build_index(
            water_plugin(UPDATE, W1),
            water_plugin(BROKEN, W2, form_key=OTHER_CELL),
            water_plugin(MOD_A, W2),
        ),
        broken_plugins=frozenset({BROKEN}),
    )

    patch, report = run_engine(index)

    assert patch.override_for(CELL) is not None
    assert report.patches_by_plugin == {"ModA.esp": 1}
    assert report.skipped_plugin_names == ("Broken.esp",)
    assert "cannot decode" in report.skipped_plugins[0].reason
    assert report.has_errors


def _index_with_failing_first_record(**faults: frozenset[FormKey]) -> FaultyRecordIndex:
    return FaultyRecordIndex(
        build_index(
            water_plugin(UPDATE, W1),
            plugin(
                MOD_A,
                make_cell(MOD_A, water=W2, form_key=FIRST_CELL),
                make_cell(MOD_A, water=W2),
            ),
        ),
        **faults,
    )


def test_plugin_isolation_skips_whole_plugin_on_unexpected_record_error() -> None:
    index = _index_with_failing_first_record(failing_records=frozenset({FIRST_CELL}))

    patch, report = run_engine(index)

    assert len(patch) == 0
    assert report.skipped_plugin_names == ("ModA.esp",)
    assert report.skipped_records == []


def test_record_isolation_skips_only_the_failing_record() -> None:
    config = ReconcileConfig(fault_isolation=FaultIsolation.RECORD)
    index = _index_with_failing_first_record(failing_records=frozenset({FIRST_CELL}))

    patch, report = run_engine(index, config)

    assert patch.override_for(CELL) is not None
    assert report.skipped_plugins == []
    assert [skipped.form_key for skipped in report.skipped_records] == [FIRST_CELL]


@pytest.mark.parametrize("isolation", list(FaultIsolation))
def test_corrupt_record_is_a_local_skip_in_every_mode(isolation: FaultIsolation) -> None:
    index = _index_with_failing_first_record(broken_records=frozenset({FIRST_CELL}))

    patch, report = run_engine(index, ReconcileConfig(fault_isolation=isolation))

    assert patch.override_for(CELL) is not None
    assert report.patches_by_plugin == {"ModA.esp": 1}
    assert report.skipped_plugins == []
    assert [skipped.form_key for skipped in report.skipped_records] == [FIRST_CELL]


def test_corrupt_record_of_another_plugin_does_not_blame_the_scanned_plugin() -> None:
    index = FaultyRecordIndex(
        build_index(
            plugin(UPDATE, make_cell(UPDATE, water=W1), make_cell(UPDATE, form_key=OTHER_CELL)),
            plugin(
                MOD_A,
                make_cell(MOD_A, water=W2),
                make_cell(MOD_A, water=W2, form_key=OTHER_CELL),
            ),
            water_plugin(MOD_B, W2, form_key=OTHER_CELL),
        ),
        broken_records=frozenset({OTHER_CELL}),
    )

    patch, report = run_engine(index)

    assert patch.override_for(CELL) is not None
    assert patch.override_for(OTHER_CELL) is None
    assert report.skipped_plugins == []
    assert [skipped.form_key for skipped in report.skipped_records] == [OTHER_CELL]


def test_unresolvable_record_is_a_local_skip() -> None:
    orphan = FormKey(local_id=0x000F00, mod=SKYRIM)
    index = FaultyRecordIndex(
        build_index(water_plugin(UPDATE, W1), water_plugin(MOD_A, W2)),
        missing_records={MOD_A: (orphan,)},
    )

    patch, report = run_engine(index)

    assert patch.override_for(CELL) is not None
    assert report.skipped_plugins == []
    assert [skipped.form_key for skipped in report.skipped_records] == [orphan]


def test_compression_flag_is_cleared_on_patched_records() -> None:
    winner = make_cell(MOD_A, water=W2, flags=COMPRESSED_FLAG | 0x1)
    index = build_index(water_plugin(UPDATE, W1), plugin(MOD_A, winner))

    patch, report = run_engine(index)

    override = patch.override_for(CELL)
    assert override is not None
    assert override.flags == 0x1
    assert report.decompressed == 1
    assert winner.is_compressed


def test_alternate_trusted_sources_are_honoured() -> None:
    config = ReconcileConfig(trusted_sources=frozenset({UPDATE, MOD_A}))
    index = build_index(water_plugin(UPDATE, W1), water_plugin(MOD_A, W2))

    patch, _report = run_engine(index, config)

    assert len(patch) == 0
