"""
Docshelf Directory Lock
-----------------------
Advisory whole-handle lock placed on a collection directory's own descriptor.
The directory is used purely as a mutex object; no lock file is created, so
the directory listing only ever contains documents.
"""

import logging
import os
from pathlib import Path

import portalocker

from ..core.errors import LockReleaseError, StorageError

logger = logging.getLogger("Docshelf.DirLock")


class _DirHandle:
    """Read-only descriptor on a directory; portalocker only needs fileno()."""

    def __init__(self, path: Path):
        self.fd = os.open(path, os.O_RDONLY)

    def fileno(self) -> int:
        return self.fd

    def close(self) -> None:
        os.close(self.fd)


class DirLock:
    """
    Shared or exclusive advisory lock on one directory.

    Acquisition blocks until granted. Every acquisition opens its own
    descriptor, so threads of one process contend the same way separate
    processes do. Release explicitly with ``release()``; leaving a ``with``
    block while still held releases as a fallback, and a failure there raises
    LockReleaseError.
    """

    def __init__(self, path: Path, shared: bool = False):
        self.path = Path(path)
        self.shared_mode = shared
        self._handle: _DirHandle | None = None

    @classmethod
    def shared(cls, path: Path) -> "DirLock":
        return cls(path, shared=True).acquire()

    @classmethod
    def exclusive(cls, path: Path) -> "DirLock":
        return cls(path, shared=False).acquire()

    @property
    def locked(self) -> bool:
        return self._handle is not None

    @property
    def mode(self) -> str:
        return "shared" if self.shared_mode else "exclusive"

    def acquire(self) -> "DirLock":
        if self._handle is not None:
            raise StorageError(f"lock on {self.path} is already held")
        try:
            handle = _DirHandle(self.path)
        except OSError as e:
            raise StorageError(f"cannot open {self.path} for locking: {e}") from e

        flags = portalocker.LOCK_SH if self.shared_mode else portalocker.LOCK_EX
        try:
            portalocker.lock(handle, flags)
        except (OSError, portalocker.exceptions.LockException) as e:
            handle.close()
            raise StorageError(f"cannot acquire {self.mode} lock on {self.path}: {e}") from e

        self._handle = handle
        logger.debug("acquired %s lock on %s", self.mode, self.path)
        return self

    def release(self) -> None:
        handle = self._handle
        if handle is None:
            return
        error = None
        try:
            portalocker.unlock(handle)
        except (OSError, portalocker.exceptions.LockException) as e:
            error = e
        else:
            self._handle = None
        finally:
            # the descriptor is closed whether or not the unlock went through
            try:
                handle.close()
            except OSError as e:
                error = error or e
        if error is not None:
            raise StorageError(f"cannot release {self.mode} lock on {self.path}: {error}") from error
        logger.debug("released %s lock on %s", self.mode, self.path)

    def __enter__(self) -> "DirLock":
        if self._handle is None:
            self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._handle is None:
            return
        try:
            self.release()
        except StorageError as e:
            logger.critical("lock on %s could not be released; collection is stuck: %s", self.path, e)
            raise LockReleaseError(f"failed to release lock on {self.path}") from e
