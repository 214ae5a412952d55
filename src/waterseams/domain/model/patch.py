"""Output layer collecting the overrides produced by one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from waterseams.domain.model.records import CellDefinition, CellOverride

if TYPE_CHECKING:
    from waterseams.domain.model.keys import FormKey, ModKey


@dataclass(slots=True)
class PatchLayer:
    """In-memory patch plugin.

    Holds at most one override per form key: ``get_or_add_override`` copies the
    given definition on first use and returns the same object afterwards.
    """

    mod: ModKey
    _overrides: dict[FormKey, CellOverride] = field(
        default_factory=dict["FormKey", CellOverride], repr=False
    )

    @property
    def overrides(self) -> tuple[CellOverride, ...]:
        return tuple(self._overrides.values())

    def get_or_add_override(self, definition: CellDefinition) -> CellOverride:
        existing = self._overrides.get(definition.form_key)
        if existing is not None:
            return existing
        override = CellOverride.from_definition(definition)
        self._overrides[definition.form_key] = override
        return override

    def override_for(self, form_key: FormKey) -> CellOverride | None:
        return self._overrides.get(form_key)

    def definitions(self) -> tuple[CellDefinition, ...]:
        """Overrides as read-only definitions originating from this layer."""
        return tuple(override.as_definition(self.mod) for override in self._overrides.values())

    def __len__(self) -> int:
        return len(self._overrides)

    def __contains__(self, form_key: object) -> bool:
        return form_key in self._overrides
