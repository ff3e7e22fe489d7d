"""Embeddable schema-free document store: one directory per collection, one file per document."""

from .core.collection import Collection
from .core.db import Db
from .core.errors import (
    DocshelfError,
    DocumentNotFound,
    IdentifierSpaceExhausted,
    InvalidIdentifier,
    LockReleaseError,
    SerializationError,
    StorageError,
)
from .core.ident import Identifier
from .core.model import Document
from .runtime import Runtime, open_db

__version__ = "0.1.0"

__all__ = [
    "Collection",
    "Db",
    "Document",
    "Identifier",
    "DocshelfError",
    "DocumentNotFound",
    "IdentifierSpaceExhausted",
    "InvalidIdentifier",
    "LockReleaseError",
    "SerializationError",
    "StorageError",
    "Runtime",
    "open_db",
]
