"""Tests for the database root and collection bootstrap."""

import tempfile
from pathlib import Path

import pytest

from docshelf.adapters.yaml_codec import YamlCodec
from docshelf.core.db import Db


def test_open_creates_root_recursively():
    """Opening a missing root creates it with its parents."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "a" / "b" / "c"
        db = Db.open(root)
        assert root.is_dir()
        assert db.root == root


def test_open_existing_root_keeps_contents():
    """Opening an existing root does not disturb it."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "users").mkdir()
        (root / "users" / "0123456789abcdef").write_text('{"name": "a"}')

        users = Db.open(root).collection("users")
        assert [d.payload for d in users.get_all()] == [{"name": "a"}]


def test_collection_creates_directory(db):
    """Collections are created on first reference."""
    users = db.collection("users")
    assert users.path == db.root / "users"
    assert users.path.is_dir()
    assert users.name == "users"
    assert users.get_all() == []


def test_collection_handles_share_state(db):
    """Two handles on the same name see the same documents."""
    id = db.collection("users").insert_one({"name": "a"})
    assert db.collection("users").get_one(id).payload == {"name": "a"}


@pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b"])
def test_collection_rejects_bad_names(db, name):
    """Names must stay inside the root."""
    with pytest.raises(ValueError):
        db.collection(name)


def test_codec_passed_to_collections(tmp_path):
    """Collections inherit the database codec."""
    db = Db.open(tmp_path, YamlCodec())
    notes = db.collection("notes")
    id = notes.insert_one({"title": "hello"})
    assert notes.path_for(id).read_text() == "title: hello\n"
    assert notes.get_one(id).payload == {"title": "hello"}


def test_id_settings_passed_to_collections(tmp_path):
    """strict_ids and max_insert_attempts reach every collection."""
    db = Db.open(tmp_path, strict_ids=False, max_insert_attempts=10)
    coll = db.collection("x")
    assert coll.strict_ids is False
    assert coll.max_insert_attempts == 10
