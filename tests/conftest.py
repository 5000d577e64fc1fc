"""Shared fixtures: file readers, polling helper, fault-injecting filesystem."""

import json
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from objectsync import LocalFileSystem


class FlakyFileSystem(LocalFileSystem):
    """LocalFileSystem that fails writes on demand and records the ones that land."""

    def __init__(self) -> None:
        self.fail_writes = False
        self.writes: list[tuple[float, str]] = []

    def write_text(self, path: Path, text: str) -> None:
        if self.fail_writes:
            raise PermissionError(13, "Permission denied", str(path))
        super().write_text(path, text)
        self.writes.append((time.monotonic(), text))


@pytest.fixture
def flaky_fs() -> FlakyFileSystem:
    return FlakyFileSystem()


@pytest.fixture
def read_json():
    """Factory: parse the JSON file at a path.

    Returns None for a file caught mid-overwrite by a background write.
    """

    def _read(path: Path):
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            return None

    return _read


@pytest.fixture
def wait_until():
    """Factory: poll *predicate* until true or fail after *timeout* seconds."""

    def _wait(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
        deadline = time.monotonic() + timeout
        while not predicate():
            if time.monotonic() > deadline:
                pytest.fail(f"condition not met within {timeout}s")
            time.sleep(0.005)

    return _wait
