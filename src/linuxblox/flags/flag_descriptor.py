"""
Flag descriptor model.

A descriptor is the in-memory state of one managed Sober flag. The kind is a
tag fixed at creation; the payload type follows it (``bool`` for toggles,
``str`` for free-form inputs).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

FlagValue = Union[bool, str]


class FlagKind(Enum):
    """Kinds of flags and the payload type each one carries."""

    TOGGLE = "toggle"
    INPUT = "input"

    @property
    def value_type(self) -> type:
        return bool if self is FlagKind.TOGGLE else str


@dataclass
class FlagDescriptor:
    """One managed switch in the external config document."""

    name: str
    description: str
    kind: FlagKind
    enabled: bool = False
    value: FlagValue = field(default="")
    category: str = "core"

    def __post_init__(self) -> None:
        if self.kind is FlagKind.TOGGLE and self.value == "":
            self.value = False
        check_value_type(self.kind, self.name, self.value)

    @property
    def is_toggle(self) -> bool:
        return self.kind is FlagKind.TOGGLE

    @property
    def is_input(self) -> bool:
        return self.kind is FlagKind.INPUT

    def as_tuple(self) -> tuple:
        return (self.name, self.enabled, self.value)


def check_value_type(kind: FlagKind, name: str, value: object) -> None:
    """Raise TypeError if ``value`` is not the payload type for ``kind``."""
    if type(value) is not kind.value_type:
        raise TypeError(
            f"Flag '{name}' is a {kind.value} flag and needs a "
            f"{kind.value_type.__name__} value, got {type(value).__name__}"
        )
