"""Port for read access to the decoded records of a load order."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from waterseams.domain.model import CellDefinition, FormKey, LoadOrder, ModKey


@runtime_checkable
class RecordIndex(Protocol):
    """Decoded cell records of every plugin in a fixed load order.

    Implementations never decide priority; that is the resolver's job.
    """

    @property
    def load_order(self) -> LoadOrder: ...

    def form_keys(self, mod: ModKey) -> Sequence[FormKey]:
        """Identities of every cell ``mod`` defines, new records and overrides alike."""
        ...

    def definitions(self, form_key: FormKey) -> Sequence[CellDefinition]:
        """Every plugin's definition of ``form_key``, in no particular order."""
        ...
