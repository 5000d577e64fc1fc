"""First contact with the file: load what is there or seed it.

Runs exactly once per handle, synchronously, before the view exists.
"""

from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

from .codec import Codec, FormatError, decode
from .filesystem import FileSystem
from .log import get_logger

logger = get_logger(__name__)


def bootstrap(
    path: Path,
    default_content: MutableMapping[str, Any],
    recursive: bool,
    codec: Codec,
    fs: FileSystem,
) -> MutableMapping[str, Any]:
    """Return the starting content for *path*.

    An existing file is read and parsed; its content replaces the default.
    A missing file is created from *default_content*, and the default object
    itself (not a parsed copy) is returned. With *recursive*, a missing parent
    directory is created first, one level only.

    Raises FormatError when the existing text cannot be parsed into a mapping,
    and OSError for any filesystem failure.
    """
    exists = fs.exists(path)

    if recursive and not exists and not fs.exists(path.parent):
        fs.make_directory(path.parent)
        logger.debug("Created parent directory %s", path.parent)

    if exists:
        content = decode(codec, fs.read_text(path))
        if not isinstance(content, MutableMapping):
            raise FormatError(
                f"{path} must contain a mapping, got {type(content).__name__}"
            )
        logger.debug("Loaded synced content from %s", path)
        return content

    fs.write_text(path, codec.stringify(default_content))
    logger.debug("Created %s from default content", path)
    return default_content
