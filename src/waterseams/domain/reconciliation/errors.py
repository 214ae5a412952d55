"""Error taxonomy for reconciliation runs.

Only ``MissingAuthorityError`` is allowed to abort a run; everything else is
contained by the engine and degrades to skipping a plugin or a record.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from waterseams.domain.model import FormKey, ModKey


class ReconciliationError(RuntimeError):
    """Base class for reconciliation failures."""


class MissingAuthorityError(ReconciliationError):
    """No authority source is present in the load order."""

    def __init__(self, authorities: Sequence[ModKey]) -> None:
        self.authorities = tuple(authorities)
        names = ", ".join(str(mod) for mod in self.authorities)
        super().__init__(f"None of the authority sources are loaded: {names}")


class UnresolvableIdentityError(ReconciliationError, LookupError):
    """No plugin in the load order defines the record."""

    def __init__(self, form_key: FormKey) -> None:
        self.form_key = form_key
        super().__init__(f"No plugin defines {form_key}")


class CorruptDefinitionError(ReconciliationError):
    """A stored record could not be decoded into a definition."""

    def __init__(self, mod: ModKey, detail: str, *, form_key: FormKey | None = None) -> None:
        self.mod = mod
        self.form_key = form_key
        location = f"{form_key} in {mod}" if form_key is not None else str(mod)
        super().__init__(f"Corrupt record data ({location}): {detail}")


class FileProcessingError(ReconciliationError):
    """Scanning one plugin failed; the plugin is skipped."""

    def __init__(self, mod: ModKey, reason: str) -> None:
        self.mod = mod
        self.reason = reason
        super().__init__(f"Skipped {mod}: {reason}")
