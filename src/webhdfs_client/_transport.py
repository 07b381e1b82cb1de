"""Transport — host-failover execution of WebHDFS REST calls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import quote, urlsplit

import requests

from webhdfs_client._classify import classify
from webhdfs_client._config import DEFAULT_API_ROOT, DEFAULT_TIMEOUT
from webhdfs_client._errors import InvalidRequest, NetworkFailure, NoActiveHost
from webhdfs_client._path import HdfsPath

if TYPE_CHECKING:
    from collections.abc import Sequence

    from webhdfs_client._types import HttpExecutor, Params

log = logging.getLogger(__name__)

_NETWORK_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
)
_INVALID_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.URLRequired,
)
# Two-phase CREATE/APPEND must see the 307 themselves to read ``Location``.
_REDIRECT_METHODS = frozenset({"GET", "HEAD"})


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Transport:
    """Executes filesystem operations against the first host that answers.

    Hosts are tried in the given order on every call. A connection-level
    failure moves on to the next host; any HTTP response ends the search and
    is classified into a typed error or returned as-is.

    :param hosts: Ordered base URLs, e.g. ``["http://nn1:50070", "http://nn2:50070"]``.
    :param user: Identity sent as ``user.name`` with every call.
    :param timeout: Connect/read timeout in seconds for every HTTP call.
    :param api_root: REST prefix between host and file path.
    :param executor: Callable shaped like ``requests.Session.request``. When
        omitted the transport owns a ``requests.Session``.
    """

    def __init__(
        self,
        hosts: Sequence[str],
        user: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        api_root: str = DEFAULT_API_ROOT,
        executor: Optional[HttpExecutor] = None,
    ) -> None:
        if not hosts:
            raise ValueError("At least one host is required")
        self._hosts = tuple(h.rstrip("/") for h in hosts)
        self._user = user
        self._timeout = timeout
        root = api_root.strip("/")
        self._api_root = f"/{root}/" if root else "/"
        self._session: Optional[requests.Session] = None
        if executor is None:
            self._session = requests.Session()
            executor = self._session.request
        self._executor = executor

    def __repr__(self) -> str:
        return f"Transport(hosts={list(self._hosts)!r}, user={self._user!r})"

    @property
    def hosts(self) -> tuple[str, ...]:
        return self._hosts

    @property
    def user(self) -> str:
        return self._user

    @property
    def timeout(self) -> float:
        return self._timeout

    def close(self) -> None:
        """Close the owned HTTP session, if any."""
        if self._session is not None:
            self._session.close()
            self._session = None

    # region: request building

    def build_url(self, host: str, path: HdfsPath) -> str:
        """Assemble ``<host><api_root><path>`` for one host.

        :raises InvalidRequest: If ``host`` is not an ``http(s)://`` URL.
        """
        parsed = urlsplit(host)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidRequest(f"Invalid host URL: {host!r}", path=str(path), host=host)
        encoded = quote("/".join(path.parts), safe="/")
        return f"{host}{self._api_root}{encoded}"

    def _query(self, operation: str, params: Optional[Params]) -> list[tuple[str, str]]:
        query = [("op", operation), ("user.name", self._user)]
        if params:
            query.extend((name, _format_value(value)) for name, value in params.items() if value is not None)
        return query

    # endregion

    # region: sending

    def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[list[tuple[str, str]]] = None,
        data: Any = None,
        headers: Optional[dict[str, str]] = None,
        stream: bool = False,
        path: Optional[str] = None,
        host: Optional[str] = None,
    ) -> requests.Response:
        log.debug("HTTP [%s] '%s'", method, url)
        try:
            response = self._executor(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                timeout=self._timeout,
                stream=stream,
                allow_redirects=method in _REDIRECT_METHODS,
            )
        except _INVALID_URL_ERRORS as exc:
            raise InvalidRequest(f"Invalid request URL {url!r}: {exc}", path=path, host=host) from exc
        except _NETWORK_ERRORS as exc:
            raise NetworkFailure(f"Network error: {exc}", path=path, host=host) from exc
        log.debug("CODE [%d]", response.status_code)

        if response.status_code >= 400:
            try:
                body = response.text
            except _NETWORK_ERRORS as exc:
                raise NetworkFailure(f"Network error: {exc}", path=path, host=host) from exc
            finally:
                response.close()
            error = classify(response.status_code, body, path=path, host=host)
            if error is not None:
                raise error
        return response

    def request(
        self,
        method: str,
        url: str,
        *,
        data: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        """Send one request to an absolute URL without host failover.

        Used for the second phase of ``CREATE``/``APPEND``, whose target is a
        data node named by the server.

        :raises NetworkFailure: If no response was received.
        """
        return self._send(method, url, data=data, headers=headers, host=urlsplit(url).netloc or None)

    def execute(
        self,
        method: str,
        path: str | HdfsPath,
        operation: str,
        params: Optional[Params] = None,
        *,
        stream: bool = False,
    ) -> requests.Response:
        """Run ``operation`` on ``path`` against the first responsive host.

        ``None`` values in ``params`` are omitted so the server default applies.

        :raises InvalidRequest: If a request URL cannot be built.
        :raises NoActiveHost: If every host failed at the connection level.
        :raises WebHdfsError: The classified error of the host that answered.
        """
        hdfs_path = HdfsPath(path)
        query = self._query(operation, params)
        last_error: Optional[NetworkFailure] = None
        for host in self._hosts:
            url = self.build_url(host, hdfs_path)
            try:
                return self._send(method, url, params=query, stream=stream, path=str(hdfs_path), host=host)
            except NetworkFailure as exc:
                log.info("Host '%s' is inactive, or unreachable", host)
                last_error = exc
        log.warning("No active host among %s for %s %s", list(self._hosts), operation, hdfs_path)
        raise NoActiveHost(
            "Not found active host", path=str(hdfs_path), last_error=last_error
        ) from last_error

    def execute_json(
        self,
        method: str,
        path: str | HdfsPath,
        operation: str,
        params: Optional[Params] = None,
    ) -> dict[str, Any]:
        """Like :meth:`execute`, then decode the body as a JSON object.

        :raises NetworkFailure: If the body cannot be read or is not a JSON object.
        """
        hdfs_path = HdfsPath(path)
        response = self.execute(method, hdfs_path, operation, params)
        try:
            payload = response.json()
        except (ValueError, *_NETWORK_ERRORS) as exc:
            raise NetworkFailure(f"Unreadable {operation} response: {exc}", path=str(hdfs_path)) from exc
        finally:
            response.close()
        if not isinstance(payload, dict):
            raise NetworkFailure(f"Unexpected {operation} response: {payload!r}", path=str(hdfs_path))
        return payload

    # endregion
