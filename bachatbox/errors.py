"""Exception types raised by ``bachatbox``.

Only decoding failures abort an import. Row-level problems are absorbed by the
assembler and show up as a smaller ``ImportBatch.imported`` count instead.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """The file content could not be read as the declared kind."""

    def __init__(self, message: str, *, file_kind: str | None = None) -> None:
        super().__init__(message)
        self.file_kind = file_kind


class UnsupportedFileType(DecodeError):
    """The file name does not carry a ``.csv``, ``.xlsx`` or ``.xls`` extension."""


class InsufficientBalance(ValueError):
    """A wallet payment exceeds the available balance."""


class RecordNotFound(LookupError):
    """No stored record exists for the requested id."""


__all__ = [
    "DecodeError",
    "InsufficientBalance",
    "RecordNotFound",
    "UnsupportedFileType",
]
