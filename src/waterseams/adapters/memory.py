"""In-memory record index built from already-decoded plugins."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from waterseams.domain.model import LoadOrder

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from waterseams.domain.model import CellDefinition, FormKey, ModKey, PatchLayer


@dataclass(frozen=True, slots=True)
class PluginContents:
    """Decoded cell records of one plugin."""

    mod: ModKey
    cells: tuple[CellDefinition, ...] = ()

    def __post_init__(self) -> None:
        seen: set[FormKey] = set()
        for cell in self.cells:
            if cell.origin != self.mod:
                raise ValueError(
                    f"Cell {cell.form_key} originates from {cell.origin}, not {self.mod}"
                )
            if cell.form_key in seen:
                raise ValueError(f"Cell {cell.form_key} defined twice in {self.mod}")
            seen.add(cell.form_key)

    @classmethod
    def from_patch_layer(cls, layer: PatchLayer) -> PluginContents:
        return cls(mod=layer.mod, cells=layer.definitions())


@dataclass(slots=True)
class InMemoryRecordIndex:
    """Record index over plugins held in memory; the load order follows input order."""

    _load_order: LoadOrder
    _form_keys_by_mod: dict[ModKey, tuple[FormKey, ...]] = field(repr=False)
    _definitions_by_form_key: dict[FormKey, list[CellDefinition]] = field(repr=False)

    @classmethod
    def from_plugins(cls, plugins: Iterable[PluginContents]) -> InMemoryRecordIndex:
        plugin_list = list(plugins)
        load_order = LoadOrder(tuple(plugin.mod for plugin in plugin_list))
        definitions: defaultdict[FormKey, list[CellDefinition]] = defaultdict(list)
        for plugin in plugin_list:
            for cell in plugin.cells:
                definitions[cell.form_key].append(cell)
        return cls(
            _load_order=load_order,
            _form_keys_by_mod={
                plugin.mod: tuple(cell.form_key for cell in plugin.cells) for plugin in plugin_list
            },
            _definitions_by_form_key=dict(definitions),
        )

    @property
    def load_order(self) -> LoadOrder:
        return self._load_order

    def form_keys(self, mod: ModKey) -> Sequence[FormKey]:
        return self._form_keys_by_mod.get(mod, ())

    def definitions(self, form_key: FormKey) -> Sequence[CellDefinition]:
        return tuple(self._definitions_by_form_key.get(form_key, ()))
