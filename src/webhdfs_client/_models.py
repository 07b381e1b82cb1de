"""Immutable file status snapshot parsed from ``FileStatus`` JSON objects."""

from __future__ import annotations

import dataclasses
import enum
from datetime import datetime, timezone
from typing import Any

_KNOWN_FIELDS = frozenset(
    {
        "accessTime",
        "blockSize",
        "childrenNum",
        "fileId",
        "group",
        "length",
        "modificationTime",
        "owner",
        "pathSuffix",
        "permission",
        "replication",
        "storagePolicy",
        "type",
    }
)


class FileType(enum.Enum):
    """Entry type reported by the server."""

    FILE = "FILE"
    DIRECTORY = "DIRECTORY"


def _from_millis(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


@dataclasses.dataclass(frozen=True)
class FileStatus:
    """Immutable snapshot of one entry's metadata.

    Timestamps are milliseconds since the epoch, as sent by the server.

    :param type: File or directory.
    :param length: Size in bytes (0 for directories).
    :param path_suffix: Entry name relative to the listed directory; empty
        for ``GETFILESTATUS`` responses.
    :param extra: Server fields not modelled explicitly (e.g. ``symlink``).
    """

    type: FileType
    length: int = 0
    owner: str = ""
    group: str = ""
    permission: str = ""
    access_time: int = 0
    modification_time: int = 0
    block_size: int = 0
    replication: int = 0
    children_num: int = 0
    file_id: int = 0
    storage_policy: int = 0
    path_suffix: str = ""
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_json(cls, stat: dict[str, Any]) -> FileStatus:
        """Build a snapshot from a decoded ``FileStatus`` object."""
        return cls(
            type=FileType.DIRECTORY if stat.get("type") == "DIRECTORY" else FileType.FILE,
            length=int(stat.get("length", 0)),
            owner=str(stat.get("owner", "")),
            group=str(stat.get("group", "")),
            permission=str(stat.get("permission", "")),
            access_time=int(stat.get("accessTime", 0)),
            modification_time=int(stat.get("modificationTime", 0)),
            block_size=int(stat.get("blockSize", 0)),
            replication=int(stat.get("replication", 0)),
            children_num=int(stat.get("childrenNum", 0)),
            file_id=int(stat.get("fileId", 0)),
            storage_policy=int(stat.get("storagePolicy", 0)),
            path_suffix=str(stat.get("pathSuffix", "")),
            extra={k: v for k, v in stat.items() if k not in _KNOWN_FIELDS},
        )

    @property
    def is_dir(self) -> bool:
        return self.type is FileType.DIRECTORY

    @property
    def accessed_at(self) -> datetime:
        return _from_millis(self.access_time)

    @property
    def modified_at(self) -> datetime:
        return _from_millis(self.modification_time)
