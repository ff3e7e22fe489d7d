from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .ident import Identifier

T = TypeVar("T")


@dataclass
class Document(Generic[T]):
    """
    A payload together with the identifier naming its file.

    The identifier is never written into the file; reassigning ``id`` inside
    an update mutator does not move or rename anything.
    """

    id: Identifier
    payload: T

    def as_dict(self) -> dict[str, Any]:
        # mapping payloads are flattened next to the id
        if isinstance(self.payload, Mapping):
            return {"id": self.id.to_text(), **self.payload}
        return {"id": self.id.to_text(), "payload": self.payload}
