"""Record index over one or more load-order dump files."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from waterseams.domain.model import LoadOrder, ModKey
from waterseams.domain.reconciliation import CorruptDefinitionError

from .schema import LoadOrderDocument
from .translator import parse_cell, peek_form_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from waterseams.domain.model import CellDefinition, FormKey

log = logging.getLogger(__name__)


def read_document(path: Path) -> LoadOrderDocument:
    return LoadOrderDocument.model_validate_json(path.read_bytes())


class JsonRecordIndex:
    """Record index that decodes cell entries on first access.

    A plugin whose cell list cannot be enumerated, or that lists a cell twice,
    contributes no definitions and fails on ``form_keys``; a single bad cell entry
    only fails lookups of that record.
    """

    def __init__(self, documents: Iterable[LoadOrderDocument]) -> None:
        plugins = [plugin for document in documents for plugin in document.plugins]
        self._load_order = LoadOrder.from_names(plugin.name for plugin in plugins)
        self._form_keys_by_mod: dict[ModKey, tuple[FormKey, ...]] = {}
        self._broken_plugins: dict[ModKey, str] = {}
        self._raw_by_form_key: defaultdict[FormKey, list[tuple[ModKey, object]]] = defaultdict(
            list
        )
        self._decoded: dict[tuple[ModKey, FormKey], CellDefinition] = {}

        for plugin in plugins:
            mod = ModKey(plugin.name)
            try:
                entries = _unique_entries(mod, plugin.cells)
            except CorruptDefinitionError as exc:
                log.warning("Cannot enumerate cells of %s: %s", mod, exc)
                self._broken_plugins[mod] = str(exc)
                continue
            self._form_keys_by_mod[mod] = tuple(form_key for form_key, _raw in entries)
            for form_key, raw in entries:
                self._raw_by_form_key[form_key].append((mod, raw))

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> JsonRecordIndex:
        return cls(read_document(path) for path in paths)

    @property
    def load_order(self) -> LoadOrder:
        return self._load_order

    def form_keys(self, mod: ModKey) -> Sequence[FormKey]:
        reason = self._broken_plugins.get(mod)
        if reason is not None:
            raise CorruptDefinitionError(mod, reason)
        return self._form_keys_by_mod.get(mod, ())

    def definitions(self, form_key: FormKey) -> Sequence[CellDefinition]:
        entries = self._raw_by_form_key.get(form_key, ())
        return tuple(self._decode(mod, form_key, raw) for mod, raw in entries)

    def _decode(self, mod: ModKey, form_key: FormKey, raw: object) -> CellDefinition:
        cached = self._decoded.get((mod, form_key))
        if cached is None:
            cached = parse_cell(raw, mod)
            self._decoded[(mod, form_key)] = cached
        return cached


def _unique_entries(mod: ModKey, cells: Sequence[object]) -> list[tuple[FormKey, object]]:
    entries: list[tuple[FormKey, object]] = []
    seen: set[FormKey] = set()
    for raw in cells:
        form_key = peek_form_key(raw, mod)
        if form_key in seen:
            raise CorruptDefinitionError(mod, f"cell {form_key} listed twice")
        seen.add(form_key)
        entries.append((form_key, raw))
    return entries
