"""Translate load-order dump payloads into domain records and back."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

from pydantic import ValidationError

from waterseams.adapters.memory import PluginContents
from waterseams.domain.model import CellDefinition, FormKey, ModKey
from waterseams.domain.reconciliation import CorruptDefinitionError

from .schema import CellPayload, PluginPayload

if TYPE_CHECKING:
    from waterseams.domain.model import CellOverride, PatchLayer

    from .schema import LoadOrderDocument


def peek_form_key(raw: object, mod: ModKey) -> FormKey:
    """Read only the identity of a raw cell entry."""

    if not isinstance(raw, Mapping):
        raise CorruptDefinitionError(mod, f"cell entry is not an object: {raw!r}")
    mapping = cast(Mapping[str, Any], raw)
    text = mapping.get("formKey", mapping.get("form_key"))
    if not isinstance(text, str):
        raise CorruptDefinitionError(mod, "cell entry without formKey")
    try:
        return FormKey.parse(text)
    except ValueError as exc:
        raise CorruptDefinitionError(mod, str(exc)) from exc


def parse_cell(raw: object, mod: ModKey) -> CellDefinition:
    form_key = peek_form_key(raw, mod)
    try:
        payload = CellPayload.model_validate(raw)
        water = FormKey.parse(payload.water) if payload.water is not None else None
    except (ValidationError, ValueError) as exc:
        raise CorruptDefinitionError(mod, str(exc), form_key=form_key) from exc
    return CellDefinition(
        form_key=form_key,
        origin=mod,
        water=water,
        editor_id=payload.editor_id,
        flags=payload.flags,
        attributes=payload.attributes,
    )


def cell_payload(override: CellOverride) -> CellPayload:
    return CellPayload(
        form_key=str(override.form_key),
        editor_id=override.editor_id,
        water=str(override.water) if override.water is not None else None,
        flags=override.flags,
        attributes=dict(override.attributes),
    )


def plugin_payload(layer: PatchLayer) -> PluginPayload:
    return PluginPayload(
        name=str(layer.mod),
        cells=[
            cell_payload(override).model_dump(by_alias=True) for override in layer.overrides
        ],
    )


def plugins_from_document(document: LoadOrderDocument) -> list[PluginContents]:
    """Decode every cell of ``document`` eagerly; any bad entry fails the whole call."""

    plugins: list[PluginContents] = []
    for plugin in document.plugins:
        mod = ModKey(plugin.name)
        cells = tuple(parse_cell(raw, mod) for raw in plugin.cells)
        plugins.append(PluginContents(mod=mod, cells=cells))
    return plugins
