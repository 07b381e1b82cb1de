"""Normalized error hierarchy for webhdfs_client."""

from __future__ import annotations

import enum
from typing import ClassVar, Optional


class ErrorKind(enum.Enum):
    """Closed set of failure categories a client operation can surface."""

    NETWORK_FAILURE = "network_failure"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    STANDBY = "standby"
    SERVER_ERROR = "server_error"
    REMOTE_ERROR = "remote_error"
    INVALID_REQUEST = "invalid_request"


class WebHdfsError(Exception):
    """Base class for all webhdfs_client errors.

    :param message: Human-readable error description, usually the raw
        response body or the serialized ``RemoteException``.
    :param path: The filesystem path involved in the error, if any.
    :param host: The host that produced the error, if any.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str = "", *, path: Optional[str] = None, host: Optional[str] = None) -> None:
        self.path = path
        self.host = host
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.args[0] if self.args else ""

    def _context(self) -> list[str]:
        parts = []
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.host is not None:
            parts.append(f"host={self.host!r}")
        return parts

    def __str__(self) -> str:
        parts = [super().__str__(), *self._context()]
        return " | ".join(p for p in parts if p)

    def __repr__(self) -> str:
        cls = type(self).__name__
        return f"{cls}({', '.join([repr(self.message), *self._context()])})"


class NetworkFailure(WebHdfsError):
    """Raised when a connection-level fault prevents getting a response."""

    kind = ErrorKind.NETWORK_FAILURE


class NoActiveHost(NetworkFailure):
    """Raised when every configured host failed at the connection level.

    :param last_error: The network failure of the last host tried.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        host: Optional[str] = None,
        last_error: Optional[BaseException] = None,
    ) -> None:
        self.last_error = last_error
        super().__init__(message, path=path, host=host)


class BadRequest(WebHdfsError):
    """HTTP 400."""

    kind = ErrorKind.BAD_REQUEST


class Unauthorized(WebHdfsError):
    """HTTP 401."""

    kind = ErrorKind.UNAUTHORIZED


class Forbidden(WebHdfsError):
    """HTTP 403 without a more specific remote exception."""

    kind = ErrorKind.FORBIDDEN


class NotFound(WebHdfsError):
    """Raised when a file or directory does not exist."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExists(WebHdfsError):
    """Raised when the target already exists (``FileAlreadyExistsException``)."""

    kind = ErrorKind.ALREADY_EXISTS


class StandbyError(WebHdfsError):
    """Raised when the answering namenode is in standby state.

    Not retried automatically: catch it and reissue the call if you want to
    wait for a failover to complete.
    """

    kind = ErrorKind.STANDBY


class ServerError(WebHdfsError):
    """HTTP 500 without a more specific remote exception."""

    kind = ErrorKind.SERVER_ERROR


class RemoteError(WebHdfsError):
    """Any other HTTP status >= 400.

    :param status_code: The HTTP status code returned by the host.
    """

    kind = ErrorKind.REMOTE_ERROR

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        host: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, path=path, host=host)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.status_code is not None:
            parts.append(f"status_code={self.status_code}")
        return parts


class InvalidRequest(WebHdfsError):
    """Raised for a request that cannot be built (bad host URL, bad path). Never retried."""

    kind = ErrorKind.INVALID_REQUEST
