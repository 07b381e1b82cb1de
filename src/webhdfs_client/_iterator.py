"""Lazy, depth-first iteration over directory contents."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from webhdfs_client._resource import Resource


class _Cursor:
    """One listed directory level and the position inside it."""

    __slots__ = ("directory", "entries", "position")

    def __init__(self, directory: Resource) -> None:
        self.directory = directory
        self.entries: list[dict[str, Any]] = directory._list_status()
        self.position = 0

    def next_entry(self) -> dict[str, Any] | None:
        if self.position >= len(self.entries):
            return None
        entry = self.entries[self.position]
        self.position += 1
        return entry


class ResourceIterator(Iterator["Resource"]):
    """Pre-order sequence of the resources under a directory.

    The root is listed on construction. With ``recursive`` set, each
    directory is listed when it is produced, so it always comes before its
    descendants. Single pass: later server-side changes are not reflected.

    :param root: Directory to enumerate.
    :param recursive: Descend into subdirectories.
    """

    def __init__(self, root: Resource, *, recursive: bool = False) -> None:
        self._recursive = recursive
        self._stack = [_Cursor(root)]

    def __iter__(self) -> ResourceIterator:
        return self

    def __next__(self) -> Resource:
        while self._stack:
            cursor = self._stack[-1]
            entry = cursor.next_entry()
            if entry is None:
                self._stack.pop()
                continue
            resource = cursor.directory._child_from_status(entry)
            if self._recursive and resource.is_dir():
                self._stack.append(_Cursor(resource))
            return resource
        raise StopIteration
