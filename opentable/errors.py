"""Error kinds raised by the Open Table engine."""

from __future__ import annotations


class EngineError(RuntimeError):
    """Base class for engine failures surfaced to callers."""


class NotFound(EngineError):
    """Raised for an unknown match, deck, save or card id."""


class InvalidState(EngineError):
    """Raised when an operation is illegal for the current match phase."""


class InvalidArgument(EngineError, ValueError):
    """Raised for a malformed request, e.g. an unknown draw source."""


class EmptyPile(EngineError):
    """Raised when revealing from an empty pile."""


class DeckExhausted(EmptyPile):
    """Raised when the stock pile has no card left to reveal."""


class DataIntegrity(EngineError):
    """Raised when stored state contradicts the catalog or the piles."""
