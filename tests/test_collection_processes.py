"""Tests for locking between separate processes."""

import multiprocessing
import threading
import traceback
from pathlib import Path

from docshelf.adapters.dir_lock import DirLock
from docshelf.core.collection import Collection


def hold_exclusive(path, ready, release):
    try:
        lock = DirLock.exclusive(Path(path))
        ready.set()
        release.wait(30)
        lock.release()
    except Exception:
        print(f"lock holder error:\n{traceback.format_exc()}")
        raise


def insert_many(path, count, process_id):
    try:
        coll = Collection(Path(path))
        for i in range(count):
            coll.insert_one({"p": process_id, "i": i})
    except Exception:
        print(f"Process {process_id} insert error:\n{traceback.format_exc()}")
        raise


def test_exclusive_lock_in_other_process_blocks_reader(tmp_path):
    """A reader waits while another process holds the collection exclusively."""
    coll = Collection(tmp_path)
    coll.insert_one({"name": "a"})

    ready = multiprocessing.Event()
    release = multiprocessing.Event()
    holder = multiprocessing.Process(target=hold_exclusive, args=(str(tmp_path), ready, release))
    holder.start()
    try:
        assert ready.wait(30)

        done = threading.Event()
        out = []

        def read():
            out.append(coll.get_all())
            done.set()

        threading.Thread(target=read, daemon=True).start()
        assert not done.wait(1.0)
    finally:
        release.set()
        holder.join(30)

    assert holder.exitcode == 0
    assert done.wait(10)
    assert [d.payload for d in out[0]] == [{"name": "a"}]


def test_inserts_from_many_processes(tmp_path):
    """Concurrent inserting processes all land, each under its own id."""
    num_processes = 4
    writes_per_process = 25

    processes = []
    for i in range(num_processes):
        p = multiprocessing.Process(
            target=insert_many,
            args=(str(tmp_path), writes_per_process, i)
        )
        processes.append(p)
        p.start()

    for p in processes:
        p.join(60)
        assert p.exitcode == 0

    docs = Collection(tmp_path).get_all()
    assert len(docs) == num_processes * writes_per_process
    assert {(d.payload["p"], d.payload["i"]) for d in docs} == {
        (p, i) for p in range(num_processes) for i in range(writes_per_process)
    }
