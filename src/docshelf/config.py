"""Configuration loader for docshelf.toml."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .adapters.json_codec import JsonCodec
from .adapters.yaml_codec import YamlCodec
from .core.ports import PayloadCodec

CONFIG_FILENAME = "docshelf.toml"
CODEC_FORMATS = ("json", "yaml")


@dataclass
class DbConfig:
    """Database root."""
    root: Path


@dataclass
class CodecConfig:
    """Payload serialization."""
    format: str = "json"
    indent: int = 2
    sort_keys: bool = False


@dataclass
class IdConfig:
    """Identifier parsing."""
    strict: bool = True


@dataclass
class InsertConfig:
    """Insert behaviour. max_attempts of 0 means retry forever."""
    max_attempts: int = 0


@dataclass
class DocshelfConfig:
    """Complete docshelf configuration."""
    db: DbConfig
    codec: CodecConfig
    ids: IdConfig
    insert: InsertConfig


def load_config(config_path: Path | None = None, root: Path | None = None) -> DocshelfConfig:
    """
    Load configuration from docshelf.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/docshelf.toml
    3. root/docshelf.toml

    Args:
        config_path: Explicit path to config file
        root: Database root used for the fallback search and as default root

    Returns:
        DocshelfConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILENAME)
    if root:
        search_paths.append(root / CONFIG_FILENAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    db_data = toml_data.get("db", {})
    db_config = DbConfig(root=Path(db_data.get("root", root or Path("./data"))))

    codec_data = toml_data.get("codec", {})
    codec_config = CodecConfig(
        format=str(codec_data.get("format", "json")).lower(),
        indent=int(codec_data.get("indent", 2)),
        sort_keys=bool(codec_data.get("sort_keys", False)),
    )

    ids_data = toml_data.get("ids", {})
    id_config = IdConfig(strict=bool(ids_data.get("strict", True)))

    insert_data = toml_data.get("insert", {})
    max_attempts = int(insert_data.get("max_attempts", 0))
    if max_attempts < 0:
        raise ValueError(f"[insert] max_attempts must be >= 0, got {max_attempts}")
    insert_config = InsertConfig(max_attempts=max_attempts)

    return DocshelfConfig(
        db=db_config,
        codec=codec_config,
        ids=id_config,
        insert=insert_config,
    )


def make_codec(config: CodecConfig) -> PayloadCodec:
    """Build the payload codec named by the config."""
    if config.format == "json":
        return JsonCodec(indent=config.indent, sort_keys=config.sort_keys)
    elif config.format == "yaml":
        return YamlCodec(sort_keys=config.sort_keys)
    else:
        raise ValueError(f"Unknown codec format: {config.format} (expected one of {CODEC_FORMATS})")
