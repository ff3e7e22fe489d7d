"""Runtime wiring helper for embedding applications."""

from dataclasses import dataclass
from pathlib import Path

from .config import DocshelfConfig, load_config, make_codec
from .core.db import Db
from .core.ports import PayloadCodec


@dataclass
class Runtime:
    """Container for all wired components."""
    db: Db
    codec: PayloadCodec
    config: DocshelfConfig


def open_db(root: Path | None = None, config_path: Path | None = None) -> Runtime:
    """Load configuration and open the database it describes."""
    config = load_config(config_path=config_path, root=root)

    # explicit root beats the config file
    if root is None:
        root = config.db.root

    codec = make_codec(config.codec)
    db = Db.open(
        root,
        codec,
        strict_ids=config.ids.strict,
        max_insert_attempts=config.insert.max_attempts or None,
    )

    return Runtime(db=db, codec=codec, config=config)
