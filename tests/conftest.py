from pathlib import Path

import pytest

from docshelf.core.db import Db


@pytest.fixture
def db(tmp_path: Path) -> Db:
    """Fresh database rooted in a temp directory."""
    return Db.open(tmp_path / "db")


@pytest.fixture
def users(db: Db):
    return db.collection("users")
