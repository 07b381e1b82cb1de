"""Type aliases used throughout webhdfs_client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, BinaryIO, Optional, Protocol, Union

if TYPE_CHECKING:
    import requests

WritableContent = Union[BinaryIO, bytes, str]
Params = dict[str, Optional[object]]


class HttpExecutor(Protocol):
    """Callable that performs one HTTP request, shaped like ``requests.Session.request``."""

    def __call__(self, method: str, url: str, **kwargs: Any) -> requests.Response: ...
