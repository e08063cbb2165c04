"""
Flag editing session.

``FlagSession`` is the boundary the presentation layer talks to. It holds
the config path, the flag registry and the collaborators for one run of the
launcher, and coordinates load -> reconcile -> mutate -> save.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Union

from .constants import FLAGS_OBJECT_KEY
from .document.loader import ConfigDocumentLoader
from .document.outcome import Outcome, OutcomeKind
from .document.reconciler import Reconciler
from .document.writer import ConfigDocumentWriter
from .flags.flag_descriptor import FlagDescriptor, FlagValue
from .flags.flag_registry import FlagListener, FlagRegistry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Kinds of a fresh re-read that must not be overwritten by a save.
_ABORT_SAVE_KINDS = (OutcomeKind.ACCESS_DENIED, OutcomeKind.IO_FAILURE)


class FlagSession:
    """
    Explicit context for one editing session.

    Only one initialize/save runs at a time; a second concurrent request
    gets a BUSY outcome. Registry mutations wait while a reconcile or render
    is reading the registry.
    """

    def __init__(
        self,
        config_path: Optional[PathLike],
        registry: Optional[FlagRegistry] = None,
        flags_key: str = FLAGS_OBJECT_KEY,
    ):
        self.config_path = str(config_path) if config_path else None
        self.registry = registry if registry is not None else FlagRegistry.default()
        self.flags_key = flags_key
        self._loader = ConfigDocumentLoader()
        self._reconciler = Reconciler(flags_key)
        self._writer = ConfigDocumentWriter(flags_key)
        self._io_guard = threading.Lock()
        self._state_lock = threading.RLock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self.is_initialized = False

    # Read / mutate

    def list_flags(self) -> List[FlagDescriptor]:
        with self._state_lock:
            return self.registry.snapshot()

    def set_enabled(self, name: str, enabled: bool) -> FlagDescriptor:
        with self._state_lock:
            return self.registry.set_enabled(name, enabled)

    def set_value(self, name: str, value: FlagValue) -> FlagDescriptor:
        with self._state_lock:
            return self.registry.set_value(name, value)

    def subscribe(self, listener: FlagListener) -> Callable[[], None]:
        return self.registry.subscribe(listener)

    # Load / save

    def initialize(self, path: Optional[PathLike] = None) -> Outcome:
        """Load the document and reconcile it into the registry."""
        if not self._io_guard.acquire(blocking=False):
            logger.warning("Initialize requested while another operation is in flight")
            return Outcome.busy()
        try:
            return self._initialize(self._target(path))
        finally:
            self._io_guard.release()

    def save(self, path: Optional[PathLike] = None) -> Outcome:
        """Re-read the document, merge the registry into it and write it back."""
        if not self._io_guard.acquire(blocking=False):
            logger.warning("Save requested while another operation is in flight")
            return Outcome.busy()
        try:
            return self._save(self._target(path))
        finally:
            self._io_guard.release()

    def _target(self, path: Optional[PathLike]) -> Optional[str]:
        return str(path) if path else self.config_path

    def _initialize(self, path: Optional[str]) -> Outcome:
        document, outcome = self._loader.load(path)
        if outcome.kind is OutcomeKind.LOADED:
            with self._state_lock:
                found = self._reconciler.apply(document, self.registry)
                self.registry.notify_all()
            if not found:
                outcome = outcome.with_note(f"No '{self.flags_key}' section found.")
        self.is_initialized = True
        logger.info(outcome.message)
        return outcome

    def _save(self, path: Optional[str]) -> Outcome:
        if not path:
            logger.error("Cannot save flags: config path not set")
            return Outcome.path_unavailable()

        document, read_outcome = self._loader.load(path)
        if read_outcome.kind in _ABORT_SAVE_KINDS:
            logger.error(f"Not saving; could not re-read config: {read_outcome.message}")
            return read_outcome
        if read_outcome.kind is OutcomeKind.MALFORMED:
            logger.warning(f"Overwriting malformed config at {path}: {read_outcome.detail}")

        try:
            with self._state_lock:
                rendered = self._writer.render(document, self.registry)
            self._writer.persist(path, rendered)
        except PermissionError as e:
            logger.error(f"Permission denied writing config {path}: {e}")
            return Outcome.access_denied(path, str(e))
        except OSError as e:
            logger.error(f"Failed to write config {path}: {e}")
            return Outcome.io_failure(path, str(e))
        except (ValueError, TypeError, RecursionError) as e:
            logger.error(f"Failed to encode config {path}: {e}")
            return Outcome.io_failure(path, f"could not encode config: {e}")

        outcome = Outcome.saved(path)
        logger.info(outcome.message)
        return outcome

    # Background execution

    def initialize_in_background(self, path: Optional[PathLike] = None) -> "Future[Outcome]":
        return self._background().submit(self.initialize, path)

    def save_in_background(self, path: Optional[PathLike] = None) -> "Future[Outcome]":
        return self._background().submit(self.save, path)

    def _background(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="linuxblox-io")
        return self._executor

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "FlagSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
