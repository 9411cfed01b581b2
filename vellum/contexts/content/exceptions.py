"""Custom exceptions for the content context."""

from pathlib import Path
from typing import Optional


class InvalidPathError(KeyError):
    """
    Raised when a content-tree path cannot be resolved.

    Subclasses KeyError so callers that treat a missing path like a missing
    key keep working.

    Attributes:
        message: Error description
        path: The path that failed
        segment: The path segment where resolution stopped
    """

    def __init__(self, message: str, path: Optional[str] = None, segment: Optional[str] = None):
        self.message = message
        self.path = path
        self.segment = segment

        parts = [message]
        if path is not None:
            parts.append(f"Path: {path}")
        if segment is not None:
            parts.append(f"Failed at: {segment}")

        super().__init__("\n".join(parts))

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the joined message
        return self.args[0]


class DocumentLoadError(ValueError):
    """
    Raised when a stored document cannot be loaded.

    Attributes:
        message: Error description
        document_path: Path of the document being loaded
        version: Stored version, when known
    """

    def __init__(self, message: str, document_path: Optional[Path] = None, version: Optional[int] = None):
        self.message = message
        self.document_path = document_path
        self.version = version

        parts = [message]
        if document_path is not None:
            parts.append(f"Document: {document_path}")
        if version is not None:
            parts.append(f"Stored version: {version}")

        super().__init__("\n".join(parts))
