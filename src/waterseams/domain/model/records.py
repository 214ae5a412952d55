"""Cell record definitions and their patch-side overrides."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from waterseams.domain.model.keys import FormKey, ModKey

COMPRESSED_FLAG: Final[int] = 0x00040000


def _frozen_attributes(value: Mapping[str, object]) -> Mapping[str, object]:
    return MappingProxyType(dict(value))


@dataclass(frozen=True, slots=True, kw_only=True)
class CellDefinition:
    """One plugin's version of a cell record.

    Only ``water`` takes part in reconciliation; every other field is carried
    through ``attributes`` untouched.
    """

    form_key: FormKey
    origin: ModKey
    water: FormKey | None = None
    editor_id: str | None = None
    flags: int = 0
    attributes: Mapping[str, object] = field(default_factory=dict[str, object])

    def __post_init__(self) -> None:
        if self.flags < 0:
            raise ValueError(f"Record flags must be non-negative: {self.flags}")
        object.__setattr__(self, "attributes", _frozen_attributes(self.attributes))

    @property
    def is_compressed(self) -> bool:
        return bool(self.flags & COMPRESSED_FLAG)


@dataclass(slots=True, kw_only=True)
class CellOverride:
    """Mutable copy of a winning definition living in the patch layer."""

    form_key: FormKey
    water: FormKey | None = None
    editor_id: str | None = None
    flags: int = 0
    attributes: dict[str, object] = field(default_factory=dict[str, object])

    @classmethod
    def from_definition(cls, definition: CellDefinition) -> CellOverride:
        return cls(
            form_key=definition.form_key,
            water=definition.water,
            editor_id=definition.editor_id,
            flags=definition.flags,
            attributes=dict(definition.attributes),
        )

    def set_water(self, target: FormKey | None) -> None:
        """Point the water reference at ``target``; ``None`` clears it."""
        self.water = target

    def has_flag(self, flag: int) -> bool:
        return bool(self.flags & flag)

    def clear_flag(self, flag: int) -> bool:
        """Clear ``flag``; returns whether it was set."""

        if not self.has_flag(flag):
            return False
        self.flags &= ~flag
        return True

    def as_definition(self, origin: ModKey) -> CellDefinition:
        return CellDefinition(
            form_key=self.form_key,
            origin=origin,
            water=self.water,
            editor_id=self.editor_id,
            flags=self.flags,
            attributes=self.attributes,
        )
