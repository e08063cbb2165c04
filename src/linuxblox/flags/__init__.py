"""
Flag model package.

- FlagDescriptor / FlagKind: one managed flag and its tagged payload
- FlagRegistry: the catalog of known flags and the mutation API
"""

from .flag_descriptor import FlagDescriptor, FlagKind, FlagValue
from .flag_registry import FlagRegistry, UnknownFlagError

__all__ = [
    "FlagDescriptor",
    "FlagKind",
    "FlagValue",
    "FlagRegistry",
    "UnknownFlagError",
]
