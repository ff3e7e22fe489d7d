"""
Docshelf Collection
-------------------
A directory of documents, one file per document, named by its identifier.

Every operation takes the directory lock before touching the directory:
reads share it, writes hold it exclusively for the whole call, so each call
is atomic with respect to every other call on the same collection.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterator

from ..adapters.dir_lock import DirLock
from ..adapters.idgen import HexId
from ..adapters.json_codec import JsonCodec
from .errors import (
    DocumentNotFound,
    IdentifierSpaceExhausted,
    InvalidIdentifier,
    SerializationError,
    StorageError,
)
from .ident import Identifier
from .model import Document
from .ports import IdGenerator, Mutator, PayloadCodec, Predicate

logger = logging.getLogger("Docshelf.Collection")


def _always(doc: Document[Any]) -> bool:
    return True


class Collection:
    def __init__(
        self,
        path: Path,
        codec: PayloadCodec | None = None,
        idgen: IdGenerator | None = None,
        *,
        strict_ids: bool = True,
        max_insert_attempts: int | None = None,
    ):
        self.path = Path(path)
        self.codec = codec if codec is not None else JsonCodec()
        self.idgen = idgen if idgen is not None else HexId()
        self.strict_ids = strict_ids
        if max_insert_attempts is not None and max_insert_attempts < 0:
            raise ValueError(f"max_insert_attempts must be >= 0, got {max_insert_attempts}")
        self.max_insert_attempts = max_insert_attempts or None

    @property
    def name(self) -> str:
        return self.path.name

    def __repr__(self) -> str:
        return f"Collection({str(self.path)!r})"

    def path_for(self, id: Identifier) -> Path:
        text = id.to_text()
        # lenient ids can hold any 16 bytes; none of these can name a listed entry
        if "/" in text or "\0" in text or text in (".", ".."):
            raise InvalidIdentifier(f"identifier does not name a file in {self.path}: {text!r}")
        return self.path / text

    # -- file helpers; callers hold the lock --------------------------------

    def _read(self, id: Identifier, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise DocumentNotFound(id, path) from e
        except OSError as e:
            raise StorageError(f"cannot read {path}: {e}") from e

    def _write(self, path: Path, data: bytes) -> None:
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"cannot write {path}: {e}") from e

    def _entries(self) -> Iterator[tuple[Identifier, Path]]:
        """Yield (identifier, path) per directory entry, in listing order."""
        try:
            names = os.listdir(self.path)
        except OSError as e:
            raise StorageError(f"cannot list {self.path}: {e}") from e
        for name in names:
            # a malformed name aborts the caller; there is no partial result
            yield Identifier.parse(name, strict=self.strict_ids), self.path / name

    def _load(self, id: Identifier, path: Path) -> Document[Any]:
        return Document(id, self.codec.decode(self._read(id, path)))

    # -- reads (shared) ------------------------------------------------------

    def get_one(self, id: Identifier) -> Document[Any]:
        with DirLock.shared(self.path) as lock:
            doc = self._load(id, self.path_for(id))
            lock.release()
        return doc

    def find_many(self, predicate: Predicate) -> list[Document[Any]]:
        """
        Documents for which ``predicate`` holds, in directory listing order.

        A file name that is not an identifier aborts the whole call. A file
        that cannot be read or decoded is not a document and is skipped.
        """
        with DirLock.shared(self.path) as lock:
            result = []
            for id, path in self._entries():
                try:
                    doc = self._load(id, path)
                except (StorageError, SerializationError) as e:
                    logger.debug("skipping %s: %s", path, e)
                    continue
                if predicate(doc):
                    result.append(doc)
            lock.release()
        return result

    def get_all(self) -> list[Document[Any]]:
        return self.find_many(_always)

    def count(self) -> int:
        return len(self.get_all())

    def ids(self) -> list[Identifier]:
        with DirLock.shared(self.path) as lock:
            result = [id for id, _ in self._entries()]
            lock.release()
        return result

    # -- writes (exclusive) --------------------------------------------------

    def insert_one(self, payload: Any) -> Identifier:
        """Store ``payload`` under a freshly generated identifier and return it."""
        data = self.codec.encode(payload)
        with DirLock.exclusive(self.path) as lock:
            id = self._create(data)
            lock.release()
        return id

    def _create(self, data: bytes) -> Identifier:
        # Existence check and create are atomic only because the caller holds
        # the exclusive lock. "xb" also catches writers that bypass the lock.
        attempts = 0
        while True:
            if self.max_insert_attempts is not None and attempts >= self.max_insert_attempts:
                raise IdentifierSpaceExhausted(
                    f"no free identifier in {self.path} after {attempts} attempts"
                )
            attempts += 1
            id = self.idgen.new_id()
            path = self.path_for(id)
            if path.exists():
                logger.debug("identifier collision on %s", id)
                continue
            try:
                with open(path, "xb") as f:
                    f.write(data)
            except FileExistsError:
                logger.debug("identifier collision on %s", id)
                continue
            except OSError as e:
                raise StorageError(f"cannot create {path}: {e}") from e
            return id

    def delete_one(self, id: Identifier) -> None:
        with DirLock.exclusive(self.path) as lock:
            path = self.path_for(id)
            try:
                path.unlink()
            except FileNotFoundError as e:
                raise DocumentNotFound(id, path) from e
            except OSError as e:
                raise StorageError(f"cannot remove {path}: {e}") from e
            lock.release()

    def replace_one(self, id: Identifier, payload: Any, *, upsert: bool = False) -> None:
        """
        Overwrite the document at ``id`` with ``payload``.

        Raises DocumentNotFound when there is no such document, unless
        ``upsert`` is set, in which case the document is created.
        """
        data = self.codec.encode(payload)
        with DirLock.exclusive(self.path) as lock:
            path = self.path_for(id)
            if not upsert and not path.is_file():
                raise DocumentNotFound(id, path)
            self._write(path, data)
            lock.release()

    def replace_document(self, doc: Document[Any], *, upsert: bool = False) -> None:
        self.replace_one(doc.id, doc.payload, upsert=upsert)

    def update_by_id(self, id: Identifier, mutator: Mutator) -> Document[Any]:
        """
        Read, mutate and write back one document under a single exclusive lock.

        ``mutator`` receives the Document and may change ``payload`` in place
        or assign a new one. The file keeps its name whatever happens to
        ``doc.id``.
        """
        with DirLock.exclusive(self.path) as lock:
            path = self.path_for(id)
            doc = self._load(id, path)
            mutator(doc)
            self._write(path, self.codec.encode(doc.payload))
            lock.release()
        return Document(id, doc.payload)

    def update_many(self, predicate: Predicate, mutator: Mutator) -> int:
        """
        Apply ``mutator`` to every document matching ``predicate``.

        Unlike the read path this is fail-closed: every entry is parsed and
        decoded before anything is written, and any failure aborts with no
        document changed. A write failure part way through the second pass
        leaves the documents already rewritten as they are.

        Returns the number of documents rewritten.
        """
        with DirLock.exclusive(self.path) as lock:
            loaded = [(self._load(id, path), path) for id, path in self._entries()]
            updated = 0
            for doc, path in loaded:
                if not predicate(doc):
                    continue
                mutator(doc)
                self._write(path, self.codec.encode(doc.payload))
                updated += 1
            lock.release()
        logger.debug("update_many rewrote %d of %d documents in %s", updated, len(loaded), self.path)
        return updated
