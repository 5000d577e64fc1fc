"""Keep a mapping and a file in sync, without explicit save calls.

Re-exports the public surface so consumers can do
``from objectsync import create, FormatError, ...``.
"""

from objectsync.codec import JSON_CODEC, Codec, FormatError
from objectsync.filesystem import FileSystem, LocalFileSystem
from objectsync.handle import SyncedHandle, create
from objectsync.settings import DEFAULT_LAZY_DELAY_MS, SaveMode, SyncSettings
from objectsync.view import SyncedView

__all__ = [
    "DEFAULT_LAZY_DELAY_MS",
    "JSON_CODEC",
    "Codec",
    "FileSystem",
    "FormatError",
    "LocalFileSystem",
    "SaveMode",
    "SyncSettings",
    "SyncedHandle",
    "SyncedView",
    "create",
]
