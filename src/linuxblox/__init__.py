"""Package initializer for linuxblox.

Exports the flag editing engine used by the launcher front ends.
"""

from .document import ConfigDocumentLoader, ConfigDocumentWriter, Outcome, OutcomeKind, Reconciler
from .flags import FlagDescriptor, FlagKind, FlagRegistry, UnknownFlagError
from .session import FlagSession

__all__ = [
    "ConfigDocumentLoader",
    "ConfigDocumentWriter",
    "Outcome",
    "OutcomeKind",
    "Reconciler",
    "FlagDescriptor",
    "FlagKind",
    "FlagRegistry",
    "UnknownFlagError",
    "FlagSession",
]
