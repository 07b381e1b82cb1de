"""Map HTTP status codes and ``RemoteException`` payloads to typed errors."""

from __future__ import annotations

import json
from typing import Any, Optional

from webhdfs_client._errors import (
    AlreadyExists,
    BadRequest,
    Forbidden,
    NotFound,
    RemoteError,
    ServerError,
    StandbyError,
    Unauthorized,
    WebHdfsError,
)

STANDBY_EXCEPTION = "StandbyException"
ALREADY_EXISTS_EXCEPTION = "FileAlreadyExistsException"


def decode_remote_exception(body: Optional[str]) -> Optional[dict[str, Any]]:
    """Extract the ``RemoteException`` object from an error body.

    Returns ``None`` when the body is empty, is not JSON, or has no
    ``RemoteException`` object. Never raises.
    """
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    remote = payload.get("RemoteException")
    if not isinstance(remote, dict):
        return None
    return remote


def classify(
    status_code: int,
    body: Optional[str] = None,
    *,
    path: Optional[str] = None,
    host: Optional[str] = None,
) -> Optional[WebHdfsError]:
    """Classify a response into an error, or ``None`` for a success status.

    :param status_code: HTTP status of the response.
    :param body: Raw response body, if any.
    :param path: Filesystem path to attach to the error.
    :param host: Host to attach to the error.
    """
    if status_code < 400:
        return None

    remote = decode_remote_exception(body)
    message = json.dumps(remote) if remote is not None else (body or "")
    exception_name = remote.get("exception") if remote is not None else None
    ctx: dict[str, Any] = {"path": path, "host": host}

    if status_code == 400:
        return BadRequest(message, **ctx)
    if status_code == 401:
        return Unauthorized(message, **ctx)
    if status_code == 403:
        if exception_name == STANDBY_EXCEPTION:
            return StandbyError(**ctx)
        if exception_name == ALREADY_EXISTS_EXCEPTION:
            return AlreadyExists(message, **ctx)
        return Forbidden(message, **ctx)
    if status_code == 404:
        return NotFound(message, **ctx)
    if status_code == 500:
        if exception_name == ALREADY_EXISTS_EXCEPTION:
            return AlreadyExists(message, **ctx)
        return ServerError(message, **ctx)
    return RemoteError(f"HTTP code: {status_code}\n Message: {message}", status_code=status_code, **ctx)
