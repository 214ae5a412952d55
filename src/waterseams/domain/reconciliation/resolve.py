"""Last-writer-wins override resolution.

The resolver answers two questions about a form key against the record index:
which definition currently wins, and which plugins define it at all. Priority is
strictly load-order position; positions are unique, so winners are deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import UnresolvableIdentityError

if TYPE_CHECKING:
    from waterseams.domain.model import CellDefinition, FormKey, LoadOrder
    from waterseams.domain.ports import RecordIndex


@dataclass(slots=True)
class OverrideResolver:
    index: RecordIndex

    @property
    def load_order(self) -> LoadOrder:
        return self.index.load_order

    def all_definitions(self, form_key: FormKey) -> tuple[CellDefinition, ...]:
        load_order = self.load_order
        return tuple(
            definition
            for definition in self.index.definitions(form_key)
            if definition.origin in load_order
        )

    def winning_definition(self, form_key: FormKey) -> CellDefinition:
        definitions = self.all_definitions(form_key)
        if not definitions:
            raise UnresolvableIdentityError(form_key)
        return max(definitions, key=lambda definition: self.load_order.priority(definition.origin))
