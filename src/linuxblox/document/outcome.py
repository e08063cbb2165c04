"""
Outcome values for config document operations.

Loader and writer failures are folded into an ``Outcome`` instead of being
raised past the session boundary. Every outcome carries a message suitable
for direct display.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(Enum):
    """Kinds of results a load or save can produce."""

    LOADED = "loaded"
    SAVED = "saved"
    PATH_UNAVAILABLE = "path_unavailable"
    NOT_FOUND = "not_found"
    EMPTY = "empty"
    MALFORMED = "malformed"
    ACCESS_DENIED = "access_denied"
    IO_FAILURE = "io_failure"
    BUSY = "busy"


# Kinds after which the caller can carry on with an (empty) document.
_RECOVERABLE = frozenset(
    {
        OutcomeKind.LOADED,
        OutcomeKind.SAVED,
        OutcomeKind.NOT_FOUND,
        OutcomeKind.EMPTY,
        OutcomeKind.MALFORMED,
    }
)

_MESSAGES = {
    OutcomeKind.LOADED: "Sober config file loaded successfully.",
    OutcomeKind.SAVED: "Flags saved successfully to Sober config!",
    OutcomeKind.PATH_UNAVAILABLE: "Sober config path could not be determined.",
    OutcomeKind.NOT_FOUND: "Sober config not found.",
    OutcomeKind.EMPTY: "Sober config is empty.",
    OutcomeKind.MALFORMED: "Sober config is not valid JSON",
    OutcomeKind.ACCESS_DENIED: "Permission denied for Sober config",
    OutcomeKind.IO_FAILURE: "Error accessing Sober config",
    OutcomeKind.BUSY: "Another load or save is still in progress.",
}


@dataclass(frozen=True)
class Outcome:
    """Result of a load or save."""

    kind: OutcomeKind
    detail: Optional[str] = None
    path: Optional[str] = None
    note: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.LOADED, OutcomeKind.SAVED, OutcomeKind.NOT_FOUND, OutcomeKind.EMPTY)

    @property
    def recoverable(self) -> bool:
        return self.kind in _RECOVERABLE

    @property
    def message(self) -> str:
        text = _MESSAGES[self.kind]
        if self.detail:
            text = f"{text.rstrip('.')}: {self.detail}"
        if self.note:
            text = f"{text} {self.note}"
        return text

    def with_note(self, note: str) -> "Outcome":
        return Outcome(self.kind, self.detail, self.path, note)

    def __str__(self) -> str:
        return self.message

    # Constructors

    @classmethod
    def loaded(cls, path: str) -> "Outcome":
        return cls(OutcomeKind.LOADED, path=path)

    @classmethod
    def saved(cls, path: str) -> "Outcome":
        return cls(OutcomeKind.SAVED, path=path)

    @classmethod
    def path_unavailable(cls) -> "Outcome":
        return cls(OutcomeKind.PATH_UNAVAILABLE)

    @classmethod
    def not_found(cls, path: str) -> "Outcome":
        return cls(OutcomeKind.NOT_FOUND, path=path)

    @classmethod
    def empty(cls, path: str) -> "Outcome":
        return cls(OutcomeKind.EMPTY, path=path)

    @classmethod
    def malformed(cls, path: str, detail: str) -> "Outcome":
        return cls(OutcomeKind.MALFORMED, detail=detail, path=path)

    @classmethod
    def access_denied(cls, path: str, detail: str) -> "Outcome":
        return cls(OutcomeKind.ACCESS_DENIED, detail=detail, path=path)

    @classmethod
    def io_failure(cls, path: Optional[str], detail: str) -> "Outcome":
        return cls(OutcomeKind.IO_FAILURE, detail=detail, path=path)

    @classmethod
    def busy(cls) -> "Outcome":
        return cls(OutcomeKind.BUSY)
