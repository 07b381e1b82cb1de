"""Client — the primary user-facing entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from webhdfs_client._config import DEFAULT_API_ROOT, DEFAULT_TIMEOUT, ClientConfig
from webhdfs_client._resource import Resource
from webhdfs_client._transport import Transport

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from webhdfs_client._path import HdfsPath
    from webhdfs_client._types import HttpExecutor


class Client:
    """A WebHDFS client over an ordered set of redundant hosts.

    :param hosts: Ordered base URLs, tried first to last on every call.
    :param user: Identity sent as ``user.name``.
    :param timeout: Connect/read timeout in seconds.
    :param api_root: REST prefix, ``/webhdfs/v1/`` by default.
    :param executor: Optional HTTP execution function (see :class:`Transport`).
    :raises ValueError: If the host list or user is empty, or timeout is not positive.
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
        ClientConfig(hosts=tuple(hosts), user=user, timeout=timeout, api_root=api_root).validate()
        self._transport = Transport(hosts, user, timeout=timeout, api_root=api_root, executor=executor)

    @classmethod
    def from_config(cls, config: ClientConfig, *, executor: Optional[HttpExecutor] = None) -> Client:
        """Build a client from a :class:`ClientConfig`."""
        config.validate()
        return cls(
            config.hosts,
            config.user,
            timeout=config.timeout,
            api_root=config.api_root,
            executor=executor,
        )

    def __repr__(self) -> str:
        return f"Client(hosts={list(self.hosts)!r}, user={self.user!r})"

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def hosts(self) -> tuple[str, ...]:
        return self._transport.hosts

    @property
    def user(self) -> str:
        return self._transport.user

    def resource(self, path: str | HdfsPath = "/") -> Resource:
        """Handle for ``path``. No remote call is made."""
        return Resource(self._transport, path)

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self._transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
