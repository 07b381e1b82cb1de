"""WebHDFS client with host failover and lazily cached resource handles."""

from webhdfs_client._classify import classify, decode_remote_exception
from webhdfs_client._client import Client
from webhdfs_client._config import ClientConfig
from webhdfs_client._errors import (
    AlreadyExists,
    BadRequest,
    ErrorKind,
    Forbidden,
    InvalidRequest,
    NetworkFailure,
    NoActiveHost,
    NotFound,
    RemoteError,
    ServerError,
    StandbyError,
    Unauthorized,
    WebHdfsError,
)
from webhdfs_client._iterator import ResourceIterator
from webhdfs_client._models import FileStatus, FileType
from webhdfs_client._path import HdfsPath
from webhdfs_client._resource import Resource
from webhdfs_client._transport import Transport

__version__ = "0.1.0"

__all__ = [
    # Core
    "Client",
    "Transport",
    "Resource",
    "ResourceIterator",
    # Path & Models
    "HdfsPath",
    "FileStatus",
    "FileType",
    # Config
    "ClientConfig",
    # Classification
    "classify",
    "decode_remote_exception",
    # Errors
    "WebHdfsError",
    "ErrorKind",
    "NetworkFailure",
    "NoActiveHost",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "AlreadyExists",
    "StandbyError",
    "ServerError",
    "RemoteError",
    "InvalidRequest",
    # Version
    "__version__",
]
