"""Plain-text rendering of reconciliation reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from waterseams.domain.model import ModKey
    from waterseams.domain.reconciliation import ReconciliationReport


def render_authorities(
    authorities: Sequence[ModKey], present: Sequence[ModKey]
) -> list[str]:
    lines: list[str] = []
    for rank, authority in enumerate(authorities):
        if authority in present:
            status = "OK (priority)" if rank == 0 else "OK"
        else:
            status = "not installed"
        lines.append(f"  {authority}: {status}")
    return lines


def render_report(report: ReconciliationReport) -> list[str]:
    lines: list[str] = ["RESULTS"]
    if report.patches:
        lines.append("Patched cells by plugin:")
        lines.extend(
            f"  {count:4d} - {plugin}" for plugin, count in report.patches_by_plugin.items()
        )
    lines.append(f"Total cells patched: {report.total_patched}")
    if report.decompressed:
        lines.append(f"Records decompressed: {report.decompressed}")
    if report.skipped_plugins:
        lines.append(f"Plugins skipped due to errors: {len(report.skipped_plugins)}")
        lines.extend(
            f"  {skipped.plugin}: {skipped.reason}" for skipped in report.skipped_plugins
        )
    if report.skipped_records:
        lines.append(f"Records skipped due to errors: {len(report.skipped_records)}")
    lines.append(report.summary_message)
    return lines
