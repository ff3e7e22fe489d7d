from typing import Any, Callable, Protocol

from .ident import Identifier
from .model import Document

Predicate = Callable[[Document[Any]], bool]
Mutator = Callable[[Document[Any]], object]


class PayloadCodec(Protocol):
    """
    Turns payloads into file contents and back.

    Both directions raise SerializationError; decode(encode(p)) == p for any
    payload this store wrote.
    """

    def encode(self, payload: Any) -> bytes:
        pass

    def decode(self, data: bytes) -> Any:
        pass


class IdGenerator(Protocol):
    def new_id(self) -> Identifier:
        pass
