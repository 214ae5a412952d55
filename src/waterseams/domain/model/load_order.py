"""Load order value object."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from waterseams.domain.model.keys import ModKey

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class LoadOrder:
    """Plugins in priority order: later entries win conflicts."""

    mods: tuple[ModKey, ...]
    _positions: dict[ModKey, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        positions: dict[ModKey, int] = {}
        for position, mod in enumerate(self.mods):
            if mod in positions:
                raise ValueError(f"Duplicate plugin in load order: {mod}")
            positions[mod] = position
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> LoadOrder:
        return cls(tuple(ModKey(name) for name in names))

    def __iter__(self) -> Iterator[ModKey]:
        return iter(self.mods)

    def __len__(self) -> int:
        return len(self.mods)

    def __contains__(self, mod: object) -> bool:
        if isinstance(mod, str):
            return any(candidate.matches(mod) for candidate in self.mods)
        return mod in self._positions

    def priority(self, mod: ModKey) -> int:
        """Position of ``mod``; higher means it wins ties."""

        try:
            return self._positions[mod]
        except KeyError:
            raise LookupError(f"Plugin not in load order: {mod}") from None

    def with_appended(self, mod: ModKey) -> LoadOrder:
        return LoadOrder((*self.mods, mod))
