"""Composition root: one file, one live mapping, one save strategy.

``create()`` is the public entry point. It validates options, bootstraps
the file, binds the strategy and returns the SyncedView; the handle that
owns all of it stays private and lives as long as the view does.
"""

import os
import threading
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

from .bootstrap import bootstrap
from .filesystem import FileSystem, LocalFileSystem
from .settings import ErrorCallback, SyncSettings
from .strategies import SaveStrategy, select_strategy
from .view import SyncedView


class SyncedHandle:
    """Owns the path, the live content and the save strategy.

    Any exception during construction propagates, so no view is handed out
    for a file that could not be loaded or created.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        default_content: MutableMapping[str, Any],
        settings: SyncSettings,
        fs: FileSystem | None = None,
    ) -> None:
        if not isinstance(default_content, MutableMapping):
            raise TypeError(
                f"default_content must be a mapping, got {type(default_content).__name__}"
            )
        self._path = Path(path).expanduser().absolute()
        self._settings = settings
        self._fs = fs if fs is not None else LocalFileSystem()
        self._lock = threading.RLock()
        self._content = bootstrap(
            self._path, default_content, settings.recursive, settings.codec, self._fs
        )
        self._strategy = select_strategy(settings, self._fs, self._path, self.serialize)
        self.view = SyncedView(self._content, self._lock, self._strategy)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def settings(self) -> SyncSettings:
        return self._settings

    @property
    def strategy(self) -> SaveStrategy:
        return self._strategy

    @property
    def content(self) -> MutableMapping[str, Any]:
        return self._content

    def serialize(self) -> str:
        """Stringify the whole current content, never mid-mutation."""
        with self._lock:
            return self._settings.codec.stringify(self._content)


def create(
    path: str | os.PathLike[str],
    default_content: MutableMapping[str, Any],
    *,
    recursive: bool = False,
    save: str | int = "sync",
    format: Any = None,
    on_error: ErrorCallback | None = None,
    filesystem: FileSystem | None = None,
) -> SyncedView:
    """Mirror a mapping to *path* and return a view that saves on mutation.

    ```python
    settings = create("/tmp/settings.json", {"theme": "dark"})
    settings["theme"] = "light"   # written to disk before this line returns
    ```

    Args:
        path: File location; relative paths are made absolute.
        default_content: Seeds the file when it does not exist yet. When it
            does exist, the file's content wins and this value is ignored.
        recursive: Create the missing parent directory (one level).
        save: "sync" (default), "async", "lazy" (1000 ms debounce) or a
            positive int of milliseconds for a lazy save with that delay.
        format: Codec, or any object with ``parse(str)`` and ``stringify(obj)``.
            Defaults to compact JSON.
        on_error: Called with the exception when an async or lazy save fails.
            Without it such failures are silently dropped.
        filesystem: Alternative FileSystem implementation.

    Raises:
        FormatError: the existing file cannot be parsed into a mapping.
        OSError: the file or its parent cannot be read, created or written.
        TypeError, ValueError: invalid options.
    """
    settings = SyncSettings.from_options(
        recursive=recursive, save=save, format=format, on_error=on_error
    )
    return SyncedHandle(path, default_content, settings, filesystem).view
