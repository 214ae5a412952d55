"""Authoritative value selection.

Truth comes from a fixed trust ranking, not from load order: the first authority
(in ranking order) that defines the record supplies it, wherever that plugin sits
and however many other plugins define the same record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waterseams.domain.model import CellDefinition, FormKey, ModKey

    from .resolve import OverrideResolver

log = logging.getLogger(__name__)


@dataclass(slots=True)
class TruthSelector:
    resolver: OverrideResolver
    authorities: tuple[ModKey, ...]

    def select_truth(self, form_key: FormKey) -> CellDefinition | None:
        """Return the highest-ranked authority's definition, or ``None``.

        Failures while enumerating definitions are reported as absent truth so a
        single broken record cannot abort the scan.
        """

        try:
            definitions = self.resolver.all_definitions(form_key)
        except Exception as exc:  # noqa: BLE001
            log.warning("Cannot read definitions of %s, leaving it untouched: %s", form_key, exc)
            return None

        for authority in self.authorities:
            for definition in definitions:
                if definition.origin == authority:
                    return definition
        return None
