"""Error types raised while reading or exporting extracted documents."""

from __future__ import annotations

from typing import Optional


class DocumentExportError(Exception):
    """Base class for document model and export failures."""


class ValidationError(DocumentExportError):
    """A wire element is missing a required field or carries a malformed one.

    Readers substitute a safe default and keep going; the error is only
    collected for reporting.
    """

    def __init__(self, index: int, field: str, message: str) -> None:
        self.index = index
        self.field = field
        super().__init__(f"element {index}: {field}: {message}")


class UnsupportedElementError(DocumentExportError):
    """An element kind the given export target cannot represent."""

    def __init__(self, index: int, tag: str, target: str) -> None:
        self.index = index
        self.tag = tag
        self.target = target
        super().__init__(f"element {index} ({tag}) is not representable in {target}")


class SerializationError(DocumentExportError):
    """The output encoder failed; no partial output is produced.

    `index` and `tag` identify the failing element, or are None when the
    container itself could not be written.
    """

    def __init__(self, index: Optional[int], tag: Optional[str], message: str) -> None:
        self.index = index
        self.tag = tag
        if index is None:
            prefix = "document"
        else:
            prefix = f"element {index} ({tag})"
        super().__init__(f"{prefix}: {message}")
