"""Field comparison between the winning and the authoritative definition."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waterseams.domain.model import CellDefinition, FormKey


def references_differ(truth: FormKey | None, winning: FormKey | None) -> bool:
    if truth is None or winning is None:
        return (truth is None) != (winning is None)
    return truth != winning


def water_needs_patch(truth: CellDefinition, winner: CellDefinition) -> bool:
    return references_differ(truth.water, winner.water)
