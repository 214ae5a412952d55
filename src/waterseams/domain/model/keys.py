"""Record and plugin identities.

Both keys are immutable value objects. Plugin names compare case-insensitively,
the way the game resolves file names, while keeping their original spelling for
display.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Final

PLUGIN_EXTENSIONS: Final[frozenset[str]] = frozenset({".esm", ".esp", ".esl"})
MAX_LOCAL_ID: Final[int] = 0xFFFFFF


@dataclass(frozen=True, slots=True, eq=False)
class ModKey:
    """A plugin file name, e.g. ``Update.esm``."""

    file_name: str

    def __post_init__(self) -> None:
        stripped = self.file_name.strip()
        if not stripped:
            raise ValueError("Plugin file name must not be blank")
        if PurePath(stripped).suffix.casefold() not in PLUGIN_EXTENSIONS:
            raise ValueError(f"Not a plugin file name: {self.file_name!r}")
        object.__setattr__(self, "file_name", stripped)

    @property
    def normalized(self) -> str:
        return self.file_name.casefold()

    def matches(self, name: str) -> bool:
        return self.normalized == name.strip().casefold()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModKey):
            return NotImplemented
        return self.normalized == other.normalized

    def __hash__(self) -> int:
        return hash(self.normalized)

    def __str__(self) -> str:
        return self.file_name


@dataclass(frozen=True, slots=True)
class FormKey:
    """Globally unique record identity: local id within its originating plugin."""

    local_id: int
    mod: ModKey

    def __post_init__(self) -> None:
        if not 0 <= self.local_id <= MAX_LOCAL_ID:
            raise ValueError(f"Local id out of range: {self.local_id:#x}")

    @classmethod
    def parse(cls, text: str) -> FormKey:
        """Parse the ``"000D62:Skyrim.esm"`` text form."""

        local_part, sep, mod_part = text.strip().partition(":")
        if not sep or len(local_part) != 6:  # noqa: PLR2004
            raise ValueError(f"Invalid form key: {text!r}")
        try:
            local_id = int(local_part, 16)
        except ValueError as exc:
            raise ValueError(f"Invalid form key: {text!r}") from exc
        return cls(local_id=local_id, mod=ModKey(mod_part))

    def __str__(self) -> str:
        return f"{self.local_id:06X}:{self.mod}"
