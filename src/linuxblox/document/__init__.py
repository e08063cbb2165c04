"""
Config document package.

- ConfigDocumentLoader: read the Sober config into a dict plus an Outcome
- Reconciler: copy document state into the flag registry
- ConfigDocumentWriter: rebuild the flags object and persist the document
"""

from .outcome import Outcome, OutcomeKind
from .loader import ConfigDocument, ConfigDocumentLoader, load_document
from .reconciler import Reconciler, apply_document
from .writer import ConfigDocumentWriter

__all__ = [
    "Outcome",
    "OutcomeKind",
    "ConfigDocument",
    "ConfigDocumentLoader",
    "load_document",
    "Reconciler",
    "apply_document",
    "ConfigDocumentWriter",
]
