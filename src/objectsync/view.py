"""SyncedView: the mapping handed to callers.

Reads pass straight through to the live content. Every mutation, whether
``view[k] = v``, ``del view[k]`` or a MutableMapping helper such as
``pop``/``update``/``clear``, goes through ``_apply``: change the content
first, then run the save strategy, then hand back the operation's result.

Only top-level keys are intercepted. Changing a nested container in place
does not trigger a save until some top-level key is assigned or deleted.
"""

import operator
import threading
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from typing import Any, TypeVar

T = TypeVar("T")


class SyncedView(MutableMapping[str, Any]):
    """Mapping view over content that is mirrored to a file."""

    __slots__ = ("_content", "_lock", "_save")

    def __init__(
        self,
        content: MutableMapping[str, Any],
        lock: threading.RLock,
        save: Callable[[], object],
    ) -> None:
        self._content = content
        self._lock = lock
        self._save = save

    # ── Reads ────────────────────────────────────────────────────────────

    def __getitem__(self, key: str) -> Any:
        return self._content[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._content)

    def __len__(self) -> int:
        return len(self._content)

    def __contains__(self, key: object) -> bool:
        return key in self._content

    def __repr__(self) -> str:
        return repr(self._content)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self._content)

    def __or__(self, other: Any) -> dict[str, Any]:
        if not isinstance(other, Mapping):
            return NotImplemented
        return {**self._content, **other}

    def __ror__(self, other: Any) -> dict[str, Any]:
        if not isinstance(other, Mapping):
            return NotImplemented
        return {**other, **self._content}

    def copy(self) -> dict[str, Any]:
        """Plain, unsynced shallow copy of the current content."""
        return dict(self._content)

    # ── Mutations ────────────────────────────────────────────────────────

    def __setitem__(self, key: str, value: Any) -> None:
        self._apply(operator.setitem, key, value)

    def __delitem__(self, key: str) -> None:
        self._apply(operator.delitem, key)

    def update(self, other: Any = (), /, **kwds: Any) -> None:
        """Apply every change, then save once."""
        self._apply(operator.methodcaller("update", other, **kwds))

    def __ior__(self, other: Any) -> "SyncedView":
        """``view |= other`` updates in place and stays synced."""
        self.update(other)
        return self

    def clear(self) -> None:
        self._apply(operator.methodcaller("clear"))

    def _apply(self, op: Callable[..., T], *args: Any) -> T:
        # The save runs even when the mutation itself raises (e.g. KeyError
        # on a missing key). A failing sync save raises after the content
        # has already changed.
        with self._lock:
            try:
                return op(self._content, *args)
            finally:
                self._save()
