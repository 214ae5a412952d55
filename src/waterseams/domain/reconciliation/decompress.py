"""Post-pass clearing the compression flag on patch records.

Newly added overrides cannot claim compressed storage: the writer serializes
them uncompressed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from waterseams.domain.model import COMPRESSED_FLAG

if TYPE_CHECKING:
    from waterseams.domain.ports import OutputLayer

log = logging.getLogger(__name__)


def decompress_overrides(output: OutputLayer, *, flag: int = COMPRESSED_FLAG) -> int:
    cleared = 0
    for override in output.overrides:
        if override.clear_flag(flag):
            log.debug("Cleared compression flag on %s", override.form_key)
            cleared += 1
    return cleared
