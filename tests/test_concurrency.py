"""
Tests for batch operations and thread safety.

Batch items run on the worker pool; each takes the store lock on its own,
so every item is applied exactly once regardless of interleaving.
"""

import threading

from memfs.errors import ErrorKind


class TestBatchOperations:
    """Tests for create_files, write_files and delete_files."""

    def test_create_files_in_input_order(self, fs):
        paths = [f"/batch/f{i:02d}" for i in range(20)]
        batch = fs.create_files(paths)
        assert batch.ok
        assert [r.path for r in batch.results] == paths
        assert all(fs.exists(p) for p in paths)

    def test_shared_parent_created_once(self, fs):
        batch = fs.create_files([f"/shared/deep/f{i}" for i in range(16)])
        assert batch.ok
        stats = fs.stats().value
        assert stats.directories == 3
        assert stats.files == 16

    def test_partial_failure_does_not_stop_others(self, fs):
        fs.create_file("/exists")
        batch = fs.create_files(["/new1", "/exists", "/new2"])
        assert not batch.ok
        assert batch.failed_paths == ["/exists"]
        assert batch.failed[0].error is ErrorKind.ALREADY_EXISTS
        assert fs.exists("/new1") and fs.exists("/new2")

    def test_write_files(self, fs):
        batch = fs.write_files([(f"/w/{i}.txt", f"content {i}") for i in range(10)])
        assert batch.ok
        assert fs.read_file("/w/7.txt").value == b"content 7"

    def test_delete_files_reports_missing(self, fs):
        fs.create_files(["/a", "/b"])
        fs.make_directory("/dir")
        batch = fs.delete_files(["/a", "/missing", "/b", "/dir"])
        assert batch.failed_paths == ["/missing", "/dir"]
        assert batch.results[1].error is ErrorKind.NOT_FOUND
        assert batch.results[3].error is ErrorKind.NOT_A_FILE
        assert not fs.exists("/a") and not fs.exists("/b")
        assert fs.exists("/dir")

    def test_single_item_batch(self, fs):
        batch = fs.create_files(["/only"])
        assert batch.ok and len(batch.results) == 1

    def test_failed_paths_name_the_items(self, fs):
        fs.write_file("/f", "x")
        batch = fs.create_files(["/f/x", "/f/y", "/ok"])
        assert batch.failed_paths == ["/f/x", "/f/y"]
        assert batch.succeeded_paths == ["/ok"]
        assert all(r.error is ErrorKind.NOT_A_DIRECTORY for r in batch.failed)
        # The message still names the file that blocked them
        assert all(r.message.startswith("/f:") for r in batch.failed)


class TestThreadSafety:
    """Concurrent callers never corrupt the store."""

    def test_concurrent_writers_and_movers(self, fs):
        fs.make_directory("/hot")
        errors: list[BaseException] = []

        def writer(n: int) -> None:
            try:
                for i in range(25):
                    fs.write_file(f"/hot/w{n}-{i}", "x")
            except BaseException as e:
                errors.append(e)

        def mover() -> None:
            try:
                for i in range(25):
                    fs.copy("/hot", f"/copy{i}")
            except BaseException as e:
                errors.append(e)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        threads.append(threading.Thread(target=mover))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        snapshot = fs.snapshot()
        assert sum(1 for p in snapshot if p.startswith("/hot/")) == 100
        # Every key's parent exists as a directory
        for path in snapshot:
            if path == "/":
                continue
            parent = path.rsplit("/", 1)[0] or "/"
            assert snapshot[parent].kind.value == "directory"

    def test_concurrent_batches_apply_each_item_once(self, fs):
        results = []

        def run(offset: int) -> None:
            results.append(fs.create_files([f"/p/{offset + i}" for i in range(10)]))

        threads = [threading.Thread(target=run, args=(n * 10,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(batch.ok for batch in results)
        assert fs.stats().value.files == 40

    def test_batch_while_holding_lock_runs_inline(self, fs):
        outcome = []

        def run() -> None:
            with fs.lock:
                outcome.append(fs.create_files(["/held/a", "/held/b", "/held/c"]))

        t = threading.Thread(target=run)
        t.start()
        t.join(5)

        assert not t.is_alive()
        assert outcome[0].ok
        assert [r.path for r in outcome[0].results] == ["/held/a", "/held/b", "/held/c"]
