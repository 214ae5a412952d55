"""Record index and writers backed by a SQLAlchemy session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select

from waterseams.domain.model import CellDefinition, FormKey, LoadOrder, ModKey
from waterseams.domain.reconciliation import CorruptDefinitionError

from .tables import cell_record_table, plugin_table

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from waterseams.adapters.memory import PluginContents
    from waterseams.domain.model import PatchLayer


class SqlAlchemyRecordIndex:
    """Record index over stored plugins.

    The load order is the stored position order minus ``exclude``, which keeps a
    previously stored patch plugin out of the run that regenerates it.
    """

    def __init__(self, session: Session, *, exclude: Iterable[ModKey] = ()) -> None:
        self.session = session
        self._excluded = frozenset(exclude)
        self._load_order: LoadOrder | None = None

    @property
    def load_order(self) -> LoadOrder:
        if self._load_order is None:
            stmt = select(plugin_table.c.name).order_by(plugin_table.c.position)
            mods = (ModKey(name) for name in self.session.execute(stmt).scalars())
            self._load_order = LoadOrder(tuple(mod for mod in mods if mod not in self._excluded))
        return self._load_order

    def form_keys(self, mod: ModKey) -> Sequence[FormKey]:
        stmt = (
            select(cell_record_table.c.local_id, cell_record_table.c.form_mod)
            .join(plugin_table, plugin_table.c.id == cell_record_table.c.plugin_id)
            .where(plugin_table.c.name_key == mod.normalized)
            .order_by(cell_record_table.c.id)
        )
        try:
            return tuple(
                FormKey(local_id=local_id, mod=ModKey(form_mod))
                for local_id, form_mod in self.session.execute(stmt)
            )
        except ValueError as exc:
            raise CorruptDefinitionError(mod, str(exc)) from exc

    def definitions(self, form_key: FormKey) -> Sequence[CellDefinition]:
        stmt = (
            select(plugin_table.c.name.label("plugin_name"), cell_record_table)
            .join(plugin_table, plugin_table.c.id == cell_record_table.c.plugin_id)
            .where(cell_record_table.c.local_id == form_key.local_id)
            .where(cell_record_table.c.form_mod_key == form_key.mod.normalized)
        )
        return tuple(_definition_from_row(form_key, row) for row in self.session.execute(stmt))


def _definition_from_row(form_key: FormKey, row: Row[Any]) -> CellDefinition:
    origin = ModKey(row.plugin_name)
    try:
        water = (
            FormKey(local_id=row.water_local_id, mod=ModKey(row.water_mod))
            if row.water_local_id is not None
            else None
        )
        return CellDefinition(
            form_key=form_key,
            origin=origin,
            water=water,
            editor_id=row.editor_id,
            flags=row.flags,
            attributes=row.attributes or {},
        )
    except (TypeError, ValueError) as exc:
        raise CorruptDefinitionError(origin, str(exc), form_key=form_key) from exc


def _cell_values(plugin_id: int, definition: CellDefinition) -> dict[str, object]:
    water = definition.water
    return {
        "plugin_id": plugin_id,
        "local_id": definition.form_key.local_id,
        "form_mod_key": definition.form_key.mod.normalized,
        "form_mod": str(definition.form_key.mod),
        "editor_id": definition.editor_id,
        "water_local_id": water.local_id if water is not None else None,
        "water_mod": str(water.mod) if water is not None else None,
        "flags": definition.flags,
        "attributes": dict(definition.attributes),
    }


def _insert_plugin(
    session: Session, mod: ModKey, position: int, cells: Iterable[CellDefinition]
) -> None:
    result = session.execute(
        insert(plugin_table).values(name_key=mod.normalized, name=str(mod), position=position)
    )
    plugin_id = result.inserted_primary_key[0]
    rows = [_cell_values(plugin_id, cell) for cell in cells]
    if rows:
        session.execute(insert(cell_record_table), rows)


def _delete_plugin(session: Session, mod: ModKey) -> None:
    plugin_ids = select(plugin_table.c.id).where(plugin_table.c.name_key == mod.normalized)
    session.execute(delete(cell_record_table).where(cell_record_table.c.plugin_id.in_(plugin_ids)))
    session.execute(delete(plugin_table).where(plugin_table.c.name_key == mod.normalized))


def import_plugins(session: Session, plugins: Iterable[PluginContents]) -> int:
    """Replace the stored load order with ``plugins``; returns the number stored."""

    session.execute(delete(cell_record_table))
    session.execute(delete(plugin_table))
    count = 0
    for position, plugin in enumerate(plugins):
        _insert_plugin(session, plugin.mod, position, plugin.cells)
        count += 1
    return count


def store_patch_layer(session: Session, layer: PatchLayer) -> None:
    """Store ``layer`` as the highest-priority plugin, replacing an earlier copy."""

    _delete_plugin(session, layer.mod)
    highest = session.execute(select(func.max(plugin_table.c.position))).scalar_one_or_none()
    position = 0 if highest is None else highest + 1
    _insert_plugin(session, layer.mod, position, layer.definitions())
