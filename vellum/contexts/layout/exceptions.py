"""Custom exceptions for the layout context."""

from typing import Any, Optional


class LayoutInvariantError(AssertionError):
    """
    Raised when the layout engine detects a programming error.

    Subclasses AssertionError so it reads as a failed invariant, but is raised
    explicitly so it survives `python -O`. A corrupt layout would silently
    desynchronize the overlay from the print output, so the engine stops instead.

    Attributes:
        message: Error description
        invariant: Short name of the violated invariant (e.g., 'known_section_kind')
        value: The offending value, if any
    """

    def __init__(self, message: str, invariant: Optional[str] = None, value: Any = None):
        self.message = message
        self.invariant = invariant
        self.value = value

        parts = [message]
        if invariant:
            parts.append(f"Invariant: {invariant}")
        if value is not None:
            text = repr(value)
            parts.append(f"Value: {text[:200] + '...' if len(text) > 200 else text}")

        super().__init__("\n".join(parts))
