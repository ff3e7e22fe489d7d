from typing import Any

import yaml

from ..core.errors import SerializationError
from ..core.ident import Identifier
from ..core.ports import PayloadCodec


class _Dumper(yaml.SafeDumper):
    pass


def _represent_identifier(dumper: yaml.SafeDumper, value: Identifier):
    return dumper.represent_str(value.to_text())


_Dumper.add_representer(Identifier, _represent_identifier)


class YamlCodec(PayloadCodec):
    """Block-style YAML through PyYAML's safe loader and dumper."""

    def __init__(self, sort_keys: bool = False):
        self.sort_keys = sort_keys

    def encode(self, payload: Any) -> bytes:
        try:
            text = yaml.dump(
                payload,
                Dumper=_Dumper,
                sort_keys=self.sort_keys,
                allow_unicode=True,
                default_flow_style=False,
            )
        except yaml.YAMLError as exc:
            raise SerializationError(f"cannot encode payload as YAML: {exc}") from exc
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        try:
            return yaml.safe_load(data.decode("utf-8"))
        except (UnicodeDecodeError, yaml.YAMLError) as exc:
            raise SerializationError(f"cannot decode YAML payload: {exc}") from exc
