from .dir_lock import DirLock
from .idgen import HexId
from .json_codec import JsonCodec
from .yaml_codec import YamlCodec

__all__ = ["DirLock", "HexId", "JsonCodec", "YamlCodec"]
