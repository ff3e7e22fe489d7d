import logging
from pathlib import Path

from .collection import Collection
from .ports import PayloadCodec

logger = logging.getLogger("Docshelf.Db")


def _check_name(name: str) -> None:
    if not name or name in (".", "..") or "/" in name or "\\" in name or "\0" in name:
        raise ValueError(f"invalid collection name: {name!r}")


class Db:
    """
    Root directory holding one subdirectory per collection.

    Nothing is registered anywhere but the filesystem; collections spring into
    existence the first time they are asked for.
    """

    def __init__(
        self,
        root: Path,
        codec: PayloadCodec | None = None,
        *,
        strict_ids: bool = True,
        max_insert_attempts: int | None = None,
    ):
        self.root = Path(root)
        self.codec = codec
        self.strict_ids = strict_ids
        self.max_insert_attempts = max_insert_attempts

    @classmethod
    def open(
        cls,
        root: Path,
        codec: PayloadCodec | None = None,
        *,
        strict_ids: bool = True,
        max_insert_attempts: int | None = None,
    ) -> "Db":
        """Open the database at ``root``, creating the directory if needed."""
        root = Path(root)
        if not root.exists():
            root.mkdir(parents=True, exist_ok=True)
            logger.info("created database root %s", root)
        return cls(root, codec, strict_ids=strict_ids, max_insert_attempts=max_insert_attempts)

    def collection(self, name: str) -> Collection:
        _check_name(name)
        path = self.root / name
        if not path.exists():
            path.mkdir(exist_ok=True)
            logger.info("created collection %s", path)
        return Collection(
            path,
            self.codec,
            strict_ids=self.strict_ids,
            max_insert_attempts=self.max_insert_attempts,
        )

    def __repr__(self) -> str:
        return f"Db({str(self.root)!r})"
