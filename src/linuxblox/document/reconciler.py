"""
Reconciliation of the flag registry with a loaded config document.
"""

import json
import logging
from typing import Any, Iterable, Mapping

from ..constants import FLAGS_OBJECT_KEY
from ..flags.flag_descriptor import FlagDescriptor, FlagKind, FlagValue

logger = logging.getLogger(__name__)


def textual_form(value: Any) -> str:
    """Render a JSON scalar the way it is spelled in JSON text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def decode_value(kind: FlagKind, raw: Any) -> FlagValue:
    text = textual_form(raw).strip()
    if kind is FlagKind.TOGGLE:
        return text.lower() == "true"
    return text


class Reconciler:
    """Overwrites descriptor state with what the document currently holds."""

    def __init__(self, flags_key: str = FLAGS_OBJECT_KEY):
        self.flags_key = flags_key

    def apply(self, document: Mapping[str, Any], descriptors: Iterable[FlagDescriptor]) -> bool:
        """
        Update every descriptor's ``enabled``/``value`` from ``document``.

        A descriptor whose name is missing from the flags object (or mapped
        to null) is disabled and keeps its last value. Calling this twice
        with the same document leaves the descriptors unchanged.

        Returns:
            True if a flags object was found and decoded, False if the key
            was absent or not an object and nothing was touched.
        """
        flags = document.get(self.flags_key)
        if not isinstance(flags, dict):
            if flags is not None:
                logger.warning(
                    f"'{self.flags_key}' in config is a {type(flags).__name__}, expected an object; skipping"
                )
            else:
                logger.info(f"Config has no '{self.flags_key}' section; keeping current flag state")
            return False

        matched = 0
        for descriptor in descriptors:
            raw = flags.get(descriptor.name)
            if raw is None:
                descriptor.enabled = False
                continue
            descriptor.enabled = True
            descriptor.value = decode_value(descriptor.kind, raw)
            matched += 1

        logger.debug(f"Reconciled {matched} enabled flags from '{self.flags_key}'")
        return True


def apply_document(document: Mapping[str, Any], descriptors: Iterable[FlagDescriptor], flags_key: str = FLAGS_OBJECT_KEY) -> bool:
    return Reconciler(flags_key).apply(document, descriptors)
