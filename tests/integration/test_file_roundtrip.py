"""Integration tests: mutate → file → reload cycles with real file I/O.

Covers the end-to-end guarantees of create(): what lands on disk after each
mutation, what a later create() on the same file sees, and the debounce
timing of lazy mode.
"""

import time
from pathlib import Path

import pytest

from objectsync import FormatError, create

pytestmark = pytest.mark.integration


def test_count_scenario_sync(state_file: Path):
    view = create(state_file, {"count": 0}, save="sync")
    assert state_file.read_text(encoding="utf-8") == '{"count":0}'
    view["count"] = 1
    assert state_file.read_text(encoding="utf-8") == '{"count":1}'
    del view["count"]
    assert state_file.read_text(encoding="utf-8") == "{}"


@pytest.mark.parametrize(
    "ops",
    [
        pytest.param(
            [("set", "a", 1), ("set", "b", [1, 2]), ("del", "a", None)], id="set-del"
        ),
        pytest.param(
            [("set", "a", {"x": 1}), ("set", "a", {"x": 2}), ("set", "c", None)],
            id="reassign",
        ),
        pytest.param(
            [("set", "k", "v"), ("del", "k", None), ("set", "k", "again")],
            id="delete-readd",
        ),
    ],
)
def test_sync_file_matches_memory_after_each_mutation(state_file, read_json, ops):
    view = create(state_file, {})
    for op, key, value in ops:
        if op == "set":
            view[key] = value
        else:
            del view[key]
        assert read_json(state_file) == dict(view)


@pytest.mark.parametrize("save", ["sync", "async", 20])
def test_reload_sees_last_saved_content(state_file, read_json, wait_until, save):
    view = create(state_file, {"count": 0, "tags": []}, save=save)
    view["count"] = 5
    view["tags"] = ["a", "b"]
    del view["count"]
    wait_until(lambda: read_json(state_file) == {"tags": ["a", "b"]})

    reloaded = create(state_file, {"count": 0}, save=save)
    assert reloaded == {"tags": ["a", "b"]}


def test_existing_file_is_not_overwritten_on_load(write_state):
    path = write_state('{"kept": true}\n')
    view = create(path, {"kept": False})
    assert view["kept"] is True
    assert path.read_text(encoding="utf-8") == '{"kept": true}\n'


def test_corrupt_file_fails_and_is_left_alone(write_state):
    path = write_state("{truncated")
    with pytest.raises(FormatError):
        create(path, {})
    assert path.read_text(encoding="utf-8") == "{truncated"


class TestDirectoryCreation:
    def test_recursive_true_creates_parent(self, tmp_path: Path):
        target = tmp_path / "missing" / "state.json"
        view = create(target, {"a": 1}, recursive=True)
        assert target.parent.is_dir()
        assert view == {"a": 1}

    def test_recursive_false_fails(self, tmp_path: Path):
        with pytest.raises(OSError):
            create(tmp_path / "missing" / "state.json", {}, recursive=False)
        assert not (tmp_path / "missing").exists()


class TestLazyTiming:
    def test_three_mutations_one_trailing_write(
        self, state_file, flaky_fs, read_json, wait_until
    ):
        view = create(state_file, {"n": 0}, save=50, filesystem=flaky_fs)
        before = len(flaky_fs.writes)

        view["n"] = 1
        time.sleep(0.01)
        view["n"] = 2
        time.sleep(0.01)
        last = time.monotonic()
        view["n"] = 3

        wait_until(lambda: len(flaky_fs.writes) == before + 1)
        time.sleep(0.1)
        burst_writes = flaky_fs.writes[before:]
        assert len(burst_writes) == 1
        # Nothing may land inside the quiet period after the last mutation.
        assert all(landed_at >= last + 0.05 for landed_at, _ in burst_writes)
        assert burst_writes[0][1] == '{"n":3}'
        assert read_json(state_file) == {"n": 3}

    def test_separate_bursts_write_separately(self, state_file, flaky_fs, wait_until):
        view = create(state_file, {}, save=20, filesystem=flaky_fs)
        before = len(flaky_fs.writes)
        view["a"] = 1
        wait_until(lambda: len(flaky_fs.writes) == before + 1)
        view["b"] = 2
        wait_until(lambda: len(flaky_fs.writes) == before + 2)
        assert flaky_fs.writes[-1][1] == '{"a":1,"b":2}'


class TestSilencedFailures:
    @pytest.mark.parametrize("save", ["async", 10])
    def test_failing_disk_never_raises(self, state_file, flaky_fs, save):
        view = create(state_file, {"a": 0}, save=save, filesystem=flaky_fs)
        flaky_fs.fail_writes = True
        for i in range(5):
            view["a"] = i
        del view["a"]
        time.sleep(0.05)
        assert view == {}
