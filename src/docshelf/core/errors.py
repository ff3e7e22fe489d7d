"""Exception hierarchy for docshelf."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ident import Identifier


class DocshelfError(Exception):
    """Base class for every recoverable store error."""


class InvalidIdentifier(DocshelfError, ValueError):
    """Identifier text has the wrong length or is not a valid token."""


class StorageError(DocshelfError):
    """Filesystem or lock failure."""


class DocumentNotFound(StorageError):
    def __init__(self, identifier: "Identifier | str", path: object | None = None):
        self.identifier = identifier
        self.path = path
        super().__init__(f"document not found: {identifier}")


class IdentifierSpaceExhausted(StorageError):
    """insert_one gave up after the configured number of colliding candidates."""


class SerializationError(DocshelfError):
    """Payload codec failed to encode or decode."""


class LockReleaseError(RuntimeError):
    """
    A directory lock could not be released on the scoped exit path.

    Not a DocshelfError: a stuck lock breaks every later guarantee on the
    collection, so callers must not handle this alongside ordinary store errors.
    """
