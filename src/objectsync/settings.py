"""Per-handle options: validation and normalization.

``create()`` accepts loose keyword options (``save="sync"``, ``save=250``,
``format=<codec-like>``); SyncSettings.from_options() checks them and turns
them into one immutable value before any file is touched.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .codec import JSON_CODEC, Codec

DEFAULT_LAZY_DELAY_MS = 1000

ErrorCallback = Callable[[BaseException], object]


class SaveMode(str, Enum):
    """When a mutation reaches the disk."""

    SYNC = "sync"  # blocking overwrite, errors propagate
    ASYNC = "async"  # background overwrite, errors silenced
    LAZY = "lazy"  # debounced background overwrite, errors silenced


def parse_save(save: Any) -> tuple[SaveMode, int]:
    """Normalize the ``save`` option into (mode, lazy delay in ms).

    Accepts "sync", "async", "lazy" (default delay) or a positive int of
    milliseconds, which selects lazy mode with that delay.
    """
    if isinstance(save, bool):
        raise TypeError("save must be 'sync', 'async', 'lazy' or milliseconds, not bool")
    if isinstance(save, int):
        if save <= 0:
            raise ValueError(f"save delay must be a positive number of ms, got {save}")
        return SaveMode.LAZY, save
    if isinstance(save, str):
        try:
            mode = SaveMode(save.lower())
        except ValueError as e:
            choices = ", ".join(m.value for m in SaveMode)
            raise ValueError(f"Unknown save mode {save!r}. Expected one of: {choices}") from e
        return mode, DEFAULT_LAZY_DELAY_MS
    raise TypeError(f"save must be a str or int, got {type(save).__name__}")


def as_codec(fmt: Any) -> Codec:
    """Accept a Codec or any object exposing callable parse/stringify."""
    if fmt is None:
        return JSON_CODEC
    if isinstance(fmt, Codec):
        return fmt
    parse = getattr(fmt, "parse", None)
    stringify = getattr(fmt, "stringify", None)
    if not callable(parse) or not callable(stringify):
        raise TypeError("format must provide callable 'parse' and 'stringify'")
    return Codec(parse=parse, stringify=stringify)


@dataclass(frozen=True, slots=True)
class SyncSettings:
    """Immutable configuration of one synced file."""

    recursive: bool = False
    mode: SaveMode = SaveMode.SYNC
    delay_ms: int = DEFAULT_LAZY_DELAY_MS
    codec: Codec = JSON_CODEC
    on_error: ErrorCallback | None = None

    @classmethod
    def from_options(
        cls,
        *,
        recursive: bool = False,
        save: Any = "sync",
        format: Any = None,
        on_error: ErrorCallback | None = None,
    ) -> "SyncSettings":
        mode, delay_ms = parse_save(save)
        if on_error is not None and not callable(on_error):
            raise TypeError("on_error must be callable")
        return cls(
            recursive=bool(recursive),
            mode=mode,
            delay_ms=delay_ms,
            codec=as_codec(format),
            on_error=on_error,
        )
