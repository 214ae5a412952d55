"""Port for the layer that receives patch overrides."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from waterseams.domain.model import CellDefinition, CellOverride, ModKey


@runtime_checkable
class OutputLayer(Protocol):
    """Write side of a run: copy-on-first-write overrides keyed by form key."""

    @property
    def mod(self) -> ModKey: ...

    @property
    def overrides(self) -> tuple[CellOverride, ...]: ...

    def get_or_add_override(self, definition: CellDefinition) -> CellOverride: ...
