"""
Error taxonomy for the review engine.

InsufficientPool is a data condition the caller is expected to branch on
(broaden the filter, show "not enough words yet"). Everything else signals a
caller contract violation and should not be caught by normal flow.
"""

from __future__ import annotations


class SpeakflowError(Exception):
    """Base class for all engine errors."""


class InsufficientPool(SpeakflowError):
    """Raised when a filter leaves too few items to build a quiz."""

    def __init__(self, available: int, required: int = 4):
        self.available = available
        self.required = required
        super().__init__(
            f"Need at least {required} distinct items for a quiz, found {available}"
        )


class InvalidTransition(SpeakflowError):
    """Raised when a session operation is called from the wrong state."""

    def __init__(self, operation: str, state: str, detail: str | None = None):
        self.operation = operation
        self.state = state
        message = f"Cannot {operation}() while session is {state}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnknownItemId(SpeakflowError, KeyError):
    """Raised when an item id is absent from the repository."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(item_id)

    def __str__(self) -> str:
        return f"Unknown item id: {self.item_id!r}"


class InvalidQuality(SpeakflowError, ValueError):
    """Raised for a review quality or rating outside its scale."""
    pass


class SnapshotVersionError(SpeakflowError):
    """Raised when a stored snapshot has an unsupported format version."""
    pass
