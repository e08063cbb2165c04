"""
Rendering and persisting the config document.

The flags object is rebuilt from the enabled descriptors on every render;
every other top-level key of the document is carried through unchanged.
"""

import contextlib
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Union

from ..constants import FLAGS_OBJECT_KEY, JSON_INDENT
from ..flags.flag_descriptor import FlagDescriptor, FlagKind
from .loader import ConfigDocument

logger = logging.getLogger(__name__)

# Canonical decimal integers only, so "007" or "+3" keep their spelling.
_CANONICAL_INT = re.compile(r"-?(0|[1-9][0-9]*)")


def encode_value(descriptor: FlagDescriptor) -> Union[bool, int, str]:
    if descriptor.kind is FlagKind.TOGGLE:
        return bool(descriptor.value)
    text = str(descriptor.value)
    stripped = text.strip()
    if _CANONICAL_INT.fullmatch(stripped) and stripped != "-0":
        try:
            return int(stripped)
        except ValueError:
            # Longer than the interpreter's int string conversion limit
            return text
    return text


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ConfigDocumentWriter:
    """Builds the updated document and writes it back to disk."""

    def __init__(self, flags_key: str = FLAGS_OBJECT_KEY, indent: int = JSON_INDENT):
        self.flags_key = flags_key
        self.indent = indent

    def render(self, document: Mapping[str, Any], descriptors: Iterable[FlagDescriptor]) -> ConfigDocument:
        """
        Return a new document with the flags object replaced.

        Args:
            document: The freshly re-read document. It is not modified.
            descriptors: Current flag state; only enabled descriptors are written.

        Returns:
            A shallow copy of ``document`` whose flags key holds the rebuilt
            flags object.
        """
        flags: Dict[str, Any] = {}
        for descriptor in descriptors:
            if descriptor.enabled:
                flags[descriptor.name] = encode_value(descriptor)

        previous = document.get(self.flags_key)
        if isinstance(previous, dict):
            dropped = [name for name in previous if name not in flags]
            if dropped:
                logger.info(f"Dropping {len(dropped)} entries from '{self.flags_key}': {', '.join(dropped)}")

        rendered: ConfigDocument = dict(document)
        rendered[self.flags_key] = flags
        return rendered

    def persist(self, path: Union[str, Path], document: Mapping[str, Any]) -> None:
        """
        Atomically write ``document`` as indented JSON to ``path``.

        Parent directories are created as needed. The data goes to a temp
        file in the same directory which then replaces the target.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=str(file_path.parent), prefix=f".{file_path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                # mkstemp creates 0600; use the existing file's mode or the umask default
                try:
                    mode = file_path.stat().st_mode & 0o7777
                except FileNotFoundError:
                    mode = _new_file_mode()
                os.chmod(tmp_path, mode)
                json.dump(document, tmp, indent=self.indent, ensure_ascii=False)
                tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, file_path)
        finally:
            if tmp_path.exists():
                with contextlib.suppress(FileNotFoundError):
                    tmp_path.unlink()

        logger.debug(f"Wrote config document to {file_path}")
