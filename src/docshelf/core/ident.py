"""Document identifiers: 16 symbols drawn from the lowercase hex alphabet."""

from __future__ import annotations

import secrets

from .errors import InvalidIdentifier

ID_SIZE = 16
ALPHABET = b"0123456789abcdef"


class Identifier:
    """
    Fixed-size token naming a document.

    Held as raw bytes. ``parse`` in strict mode guarantees the bytes are hex
    digits; lenient mode only checks the length, so ``to_text`` may fail later.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes):
        if len(raw) != ID_SIZE:
            raise InvalidIdentifier(f"identifier must be {ID_SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "_raw", bytes(raw))

    def __setattr__(self, name, value):
        raise AttributeError("Identifier is immutable")

    @classmethod
    def generate(cls) -> "Identifier":
        """Random identifier; uniqueness is the caller's concern."""
        return cls(bytes(secrets.choice(ALPHABET) for _ in range(ID_SIZE)))

    @classmethod
    def parse(cls, text: str | bytes, *, strict: bool = True) -> "Identifier":
        if isinstance(text, str):
            try:
                raw = text.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise InvalidIdentifier(f"identifier is not encodable: {text!r}") from exc
        else:
            raw = bytes(text)
        if len(raw) != ID_SIZE:
            raise InvalidIdentifier(f"identifier must be {ID_SIZE} bytes, got {len(raw)}: {text!r}")
        if strict and any(b not in ALPHABET for b in raw):
            raise InvalidIdentifier(f"identifier is not lowercase hex: {text!r}")
        return cls(raw)

    @property
    def raw(self) -> bytes:
        return self._raw

    def to_text(self) -> str:
        try:
            return self._raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidIdentifier(f"identifier is not valid UTF-8: {self._raw!r}") from exc

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Identifier({self._raw!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)
