"""HdfsPath — immutable, normalized absolute path value object."""

from __future__ import annotations

from typing import Final

from webhdfs_client._errors import InvalidRequest


class HdfsPath:
    """An immutable, normalized absolute path in the remote filesystem.

    Relative input is interpreted from the root. The root itself is ``/``.

    :param raw: The raw path string to normalize and validate.
    :raises InvalidRequest: If the path contains a null byte or a ``..`` segment.
    """

    __slots__ = ("_parts",)
    _parts: Final[tuple[str, ...]]  # type: ignore[misc]

    def __init__(self, raw: str | HdfsPath = "/") -> None:
        if isinstance(raw, HdfsPath):
            parts = raw._parts
        else:
            parts = self._normalize(str(raw))
        object.__setattr__(self, "_parts", parts)

    @staticmethod
    def _normalize(raw: str) -> tuple[str, ...]:
        if "\0" in raw:
            raise InvalidRequest("Path contains null byte", path=raw)
        parts: list[str] = []
        for segment in raw.split("/"):
            if segment == "" or segment == ".":
                continue
            if segment == "..":
                raise InvalidRequest("Path contains '..' segment", path=raw)
            parts.append(segment)
        return tuple(parts)

    @classmethod
    def _from_parts(cls, parts: tuple[str, ...]) -> HdfsPath:
        p = object.__new__(cls)
        object.__setattr__(p, "_parts", parts)
        return p

    @property
    def is_root(self) -> bool:
        return not self._parts

    @property
    def name(self) -> str:
        """Final component of the path, empty for the root."""
        return self._parts[-1] if self._parts else ""

    @property
    def parent(self) -> HdfsPath | None:
        """Parent path, or ``None`` for the root.

        Example: ``HdfsPath("/a/b").parent`` is ``HdfsPath("/a")`` and
        ``HdfsPath("/a").parent`` is the root.
        """
        if not self._parts:
            return None
        return self._from_parts(self._parts[:-1])

    @property
    def parts(self) -> tuple[str, ...]:
        """Tuple of path components, empty for the root."""
        return self._parts

    def joinpath(self, other: str | HdfsPath) -> HdfsPath:
        """Resolve ``other`` against this path. A leading ``/`` makes it absolute."""
        if isinstance(other, HdfsPath):
            return other
        if other.startswith("/"):
            return HdfsPath(other)
        return self._from_parts(self._parts + self._normalize(other))

    def __truediv__(self, other: str | HdfsPath) -> HdfsPath:
        return self.joinpath(other)

    def __str__(self) -> str:
        return "/" + "/".join(self._parts)

    def __repr__(self) -> str:
        return f"HdfsPath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HdfsPath):
            return self._parts == other._parts
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._parts)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"HdfsPath is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"HdfsPath is immutable: cannot delete '{name}'")
