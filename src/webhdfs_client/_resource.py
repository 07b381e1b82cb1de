"""Resource — a handle to one path with lazily cached metadata."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, BinaryIO, Optional

from webhdfs_client._errors import AlreadyExists, NotFound, RemoteError
from webhdfs_client._iterator import ResourceIterator
from webhdfs_client._models import FileStatus, FileType
from webhdfs_client._path import HdfsPath

if TYPE_CHECKING:
    from webhdfs_client._transport import Transport
    from webhdfs_client._types import Params, WritableContent

log = logging.getLogger(__name__)

_OCTET_STREAM = {"Content-Type": "application/octet-stream"}


def _body(content: WritableContent) -> Any:
    if isinstance(content, str):
        return content.encode("utf-8")
    return content


class Resource:
    """A file or directory in the remote filesystem.

    Metadata is fetched with ``GETFILESTATUS`` the first time an attribute is
    read and then cached on the handle for its lifetime. Mutating calls
    (``create``, ``append``, ``rename``, ``remove``, ``mkdir``) leave the
    cache alone; get a fresh handle to observe their effect. The cache fill
    is locked, so a handle shared between threads fetches at most once.

    :param transport: Transport used for every remote call.
    :param path: Absolute path of the resource.
    :param status: Pre-fetched metadata, e.g. from a directory listing.
    """

    def __init__(self, transport: Transport, path: str | HdfsPath, *, status: Optional[FileStatus] = None) -> None:
        self._transport = transport
        self._path = HdfsPath(path)
        self._status = status
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Resource(path={str(self._path)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Resource):
            return self._transport is other._transport and self._path == other._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash((id(self._transport), self._path))

    # region: navigation

    @property
    def path(self) -> HdfsPath:
        return self._path

    @property
    def name(self) -> str:
        """Base name of the path, empty for the root."""
        return self._path.name

    def child(self, path: str | HdfsPath) -> Resource:
        """Handle for ``path`` resolved against this one. No remote call."""
        return Resource(self._transport, self._path / path)

    def parent(self) -> Resource | None:
        """Handle for the parent directory, or ``None`` for the root. No remote call."""
        parent = self._path.parent
        if parent is None:
            return None
        return Resource(self._transport, parent)

    def _child_from_status(self, stat: dict[str, Any]) -> Resource:
        status = FileStatus.from_json(stat)
        return Resource(self._transport, self._path / status.path_suffix, status=status)

    # endregion

    # region: metadata

    def _field(self, payload: dict[str, Any], key: str, operation: str) -> Any:
        try:
            return payload[key]
        except KeyError:
            raise RemoteError(
                f"{operation} response has no {key!r}: {payload!r}", path=str(self._path)
            ) from None

    def get_status(self) -> FileStatus:
        """Fetch fresh metadata. Does not touch the cache."""
        payload = self._transport.execute_json("GET", self._path, "GETFILESTATUS")
        return FileStatus.from_json(self._field(payload, "FileStatus", "GETFILESTATUS"))

    def _ensure_loaded(self) -> FileStatus:
        if self._status is None:
            with self._lock:
                if self._status is None:
                    self._status = self.get_status()
        return self._status

    @property
    def is_loaded(self) -> bool:
        """Whether the metadata cache is populated."""
        return self._status is not None

    @property
    def status(self) -> FileStatus:
        """Cached metadata; fetched on first access."""
        return self._ensure_loaded()

    @property
    def type(self) -> FileType:
        return self._ensure_loaded().type

    @property
    def owner(self) -> str:
        return self._ensure_loaded().owner

    @property
    def group(self) -> str:
        return self._ensure_loaded().group

    @property
    def permission(self) -> str:
        """Octal permission string, e.g. ``"755"``."""
        return self._ensure_loaded().permission

    @property
    def length(self) -> int:
        return self._ensure_loaded().length

    @property
    def access_time(self) -> int:
        """Milliseconds since the epoch."""
        return self._ensure_loaded().access_time

    @property
    def modification_time(self) -> int:
        """Milliseconds since the epoch."""
        return self._ensure_loaded().modification_time

    @property
    def block_size(self) -> int:
        return self._ensure_loaded().block_size

    @property
    def replication(self) -> int:
        return self._ensure_loaded().replication

    @property
    def storage_policy(self) -> int:
        return self._ensure_loaded().storage_policy

    @property
    def children_num(self) -> int:
        return self._ensure_loaded().children_num

    @property
    def file_id(self) -> int:
        return self._ensure_loaded().file_id

    def exists(self) -> bool:
        """Check existence. Only ``NotFound`` maps to ``False``; other errors propagate."""
        try:
            self._ensure_loaded()
        except NotFound:
            return False
        return True

    def is_dir(self) -> bool:
        return self._ensure_loaded().type is FileType.DIRECTORY

    def is_file(self) -> bool:
        return self._ensure_loaded().type is FileType.FILE

    # endregion

    # region: write operations

    def _write_two_phase(self, method: str, operation: str, content: WritableContent, params: Params) -> None:
        response = self._transport.execute(method, self._path, operation, params)
        location = response.headers.get("Location")
        response.close()
        if not location:
            raise RemoteError(
                f"{operation} response carries no redirect location",
                path=str(self._path),
                status_code=response.status_code,
            )
        self._transport.request(method, location, data=_body(content), headers=dict(_OCTET_STREAM))

    def create(
        self,
        content: WritableContent,
        *,
        overwrite: Optional[bool] = None,
        block_size: Optional[int] = None,
        replication: Optional[int] = None,
        permission: Optional[str] = None,
        buffer_size: Optional[int] = None,
    ) -> None:
        """Create a file with ``content``.

        File-like content is streamed, not buffered. Parameters left as
        ``None`` are not sent and the server default applies.

        :raises AlreadyExists: If the file exists and overwriting is not enabled.
        """
        params: Params = {
            "overwrite": overwrite,
            "blocksize": block_size,
            "replication": replication,
            "permission": permission,
            "buffersize": buffer_size,
        }
        self._write_two_phase("PUT", "CREATE", content, params)

    def touch(self) -> None:
        """Create an empty file with server-default parameters.

        Whether an existing file is truncated or rejected is up to the
        server (WebHDFS defaults to ``overwrite=false``).
        """
        self.create(b"")

    def append(self, content: WritableContent, *, buffer_size: Optional[int] = None) -> None:
        """Append ``content`` to an existing file.

        :raises NotFound: If the file does not exist.
        """
        self._write_two_phase("POST", "APPEND", content, {"buffersize": buffer_size})

    def mkdir(self, parents: bool = False, permission: Optional[str] = None) -> bool:
        """Create this directory.

        :param parents: Create missing ancestors first, with the same permission.
        :param permission: Octal permission string; server default when ``None``.
        :returns: The server's success flag.
        """
        parent = self.parent()
        if parents and parent is not None and not parent.exists():
            try:
                parent.mkdir(parents=True, permission=permission)
            except AlreadyExists:
                log.debug("Directory '%s' was created concurrently", parent.path)
        payload = self._transport.execute_json("PUT", self._path, "MKDIRS", {"permission": permission})
        return bool(self._field(payload, "boolean", "MKDIRS"))

    def rename(self, destination: str | HdfsPath) -> bool:
        """Move this resource to the absolute path ``destination``.

        :returns: The server's success flag.
        """
        params: Params = {"destination": str(HdfsPath(destination))}
        payload = self._transport.execute_json("PUT", self._path, "RENAME", params)
        return bool(self._field(payload, "boolean", "RENAME"))

    def remove(self, recursive: bool = False) -> bool:
        """Delete this resource.

        :param recursive: Required to delete a non-empty directory.
        :returns: The server's success flag (``False`` if nothing was deleted).
        """
        payload = self._transport.execute_json("DELETE", self._path, "DELETE", {"recursive": recursive})
        return bool(self._field(payload, "boolean", "DELETE"))

    # endregion

    # region: read operations

    def open(
        self,
        *,
        offset: Optional[int] = None,
        length: Optional[int] = None,
        buffer_size: Optional[int] = None,
    ) -> BinaryIO:
        """Open the file for reading and return the response stream.

        The caller must consume and close the returned stream.

        :raises NotFound: If the file does not exist.
        """
        params: Params = {"offset": offset, "length": length, "buffersize": buffer_size}
        response = self._transport.execute("GET", self._path, "OPEN", params, stream=True)
        return response.raw  # type: ignore[no-any-return]

    def read_bytes(self, *, offset: Optional[int] = None, length: Optional[int] = None) -> bytes:
        """Read the file (or the requested range) fully."""
        with self.open(offset=offset, length=length) as stream:
            return stream.read()

    # endregion

    # region: listing

    def _list_status(self) -> list[dict[str, Any]]:
        payload = self._transport.execute_json("GET", self._path, "LISTSTATUS")
        statuses = self._field(payload, "FileStatuses", "LISTSTATUS")
        return list(self._field(statuses, "FileStatus", "LISTSTATUS"))

    def ls_resources(self, recursive: bool = False) -> ResourceIterator:
        """Lazily enumerate the contents of this directory.

        Order is the server's listing order, pre-order when ``recursive``.
        """
        return ResourceIterator(self, recursive=recursive)

    # endregion
