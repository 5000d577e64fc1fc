"""Filesystem collaborator used by bootstrap and the save strategies.

Provides:
  - FileSystem: protocol for the four primitives the library needs.
  - LocalFileSystem: direct (non-atomic) UTF-8 reads and overwrites.
  - SerialWriter: non-blocking writes, run one at a time in submit order.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Minimal file primitives. Failures surface as OSError subclasses."""

    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, text: str) -> None: ...

    def make_directory(self, path: Path) -> None: ...


class LocalFileSystem:
    """FileSystem backed by pathlib. Writes overwrite the target in place."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, text: str) -> None:
        path.write_text(text, encoding="utf-8")

    def make_directory(self, path: Path) -> None:
        """Create a single directory level (the parent must already exist)."""
        path.mkdir()


class SerialWriter:
    """Background writer for one file.

    Writes are queued on a single worker thread, so they land on disk in
    the order they were submitted and a stale write can never finish after
    a newer one.
    """

    def __init__(self, fs: FileSystem, path: Path) -> None:
        self._fs = fs
        self._path = path
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"objectsync-{path.name}"
        )

    def submit(self, text: str) -> Future[None]:
        """Queue *text* to overwrite the file. Returns the pending write."""
        return self._executor.submit(self._fs.write_text, self._path, text)

    def drain(self, timeout: float | None = None) -> None:
        """Block until every write queued so far has finished."""
        marker: Future[None] = self._executor.submit(lambda: None)
        marker.result(timeout=timeout)
