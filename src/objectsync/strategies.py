"""Save strategies: the three ways a mutation reaches the disk.

Provides:
  - SaveStrategy: protocol shared by every strategy (a zero-argument call).
  - SyncSave: blocking overwrite; failures raise from the mutation.
  - AsyncSave: queued background overwrite; failures are silenced.
  - LazySave: debounced AsyncSave; one write per burst of mutations.
  - select_strategy(): pick the single strategy a handle keeps for life.

Every strategy serializes the whole, current content through a snapshot
callable supplied by the handle. Nothing is captured ahead of time.
"""

from collections.abc import Callable
from concurrent.futures import Future
from pathlib import Path
from typing import Protocol, runtime_checkable

from .filesystem import FileSystem, SerialWriter
from .log import get_logger
from .settings import ErrorCallback, SaveMode, SyncSettings
from .timer import make_trigger

logger = get_logger(__name__)

Snapshot = Callable[[], str]


@runtime_checkable
class SaveStrategy(Protocol):
    """Persist the current content. Called after every mutation."""

    mode: SaveMode

    def __call__(self) -> object: ...


class SyncSave:
    """Overwrite the file before the mutating statement returns."""

    mode = SaveMode.SYNC

    def __init__(self, fs: FileSystem, path: Path, snapshot: Snapshot) -> None:
        self._fs = fs
        self._path = path
        self._snapshot = snapshot

    def __call__(self) -> None:
        self._fs.write_text(self._path, self._snapshot())


class AsyncSave:
    """Serialize now, write in the background.

    Writes go through one SerialWriter, so they complete in trigger order.
    Any failure is handed to *on_error* when given and otherwise dropped.
    """

    mode = SaveMode.ASYNC

    def __init__(
        self,
        writer: SerialWriter,
        snapshot: Snapshot,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.writer = writer
        self._snapshot = snapshot
        self._on_error = on_error

    def __call__(self) -> Future[None] | None:
        try:
            text = self._snapshot()
            # Refused after interpreter shutdown began (RuntimeError).
            future = self.writer.submit(text)
        except Exception as e:
            self._report(e)
            return None
        future.add_done_callback(self._check_write)
        return future

    def _check_write(self, future: Future[None]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self._report(exc)

    def _report(self, exc: BaseException) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(exc)
        except Exception:
            logger.exception("Save failure callback raised")


class LazySave:
    """Wait until mutations have been quiet for ``delay_ms``, then save once.

    The content is serialized when the deadline fires, so the write carries
    the value as of the last mutation in the burst.
    """

    mode = SaveMode.LAZY

    def __init__(self, delay_ms: int, flush: AsyncSave) -> None:
        self.delay_ms = delay_ms
        self.flush = flush
        self.trigger = make_trigger(delay_ms, flush)

    def __call__(self) -> None:
        self.trigger()


def select_strategy(
    settings: SyncSettings, fs: FileSystem, path: Path, snapshot: Snapshot
) -> SaveStrategy:
    """Build the strategy for *settings*. Chosen once, never swapped."""
    if settings.mode is SaveMode.SYNC:
        strategy: SaveStrategy = SyncSave(fs, path, snapshot)
    else:
        flush = AsyncSave(SerialWriter(fs, path), snapshot, settings.on_error)
        if settings.mode is SaveMode.ASYNC:
            strategy = flush
        else:
            strategy = LazySave(settings.delay_ms, flush)
    logger.debug("Saving %s in %s mode", path, settings.mode.value)
    return strategy
