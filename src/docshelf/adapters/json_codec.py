import json
from typing import Any

from ..core.errors import SerializationError
from ..core.ident import Identifier
from ..core.ports import PayloadCodec


def _default(value: Any) -> Any:
    if isinstance(value, Identifier):
        return value.to_text()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonCodec(PayloadCodec):
    """Pretty-printed UTF-8 JSON, one payload per file."""

    def __init__(self, indent: int | None = 2, sort_keys: bool = False):
        self.indent = indent
        self.sort_keys = sort_keys

    def encode(self, payload: Any) -> bytes:
        try:
            text = json.dumps(
                payload,
                indent=self.indent,
                sort_keys=self.sort_keys,
                ensure_ascii=False,
                default=_default,
            )
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode payload as JSON: {exc}") from exc
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        try:
            return json.loads(data)
        except ValueError as exc:
            raise SerializationError(f"cannot decode JSON payload: {exc}") from exc
