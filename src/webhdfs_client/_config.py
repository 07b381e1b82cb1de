"""Configuration model — immutable data container describing a client."""

from __future__ import annotations

import dataclasses

DEFAULT_TIMEOUT = 60.0
DEFAULT_API_ROOT = "/webhdfs/v1/"


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    """Describes how to reach a WebHDFS service.

    :param hosts: Ordered base URLs (e.g. ``http://nn1:50070``), tried in order on every call.
    :param user: Identity sent as ``user.name`` with every request.
    :param timeout: Connect/read timeout in seconds applied to every HTTP call.
    :param api_root: REST prefix placed between the host and the file path.
    """

    hosts: tuple[str, ...]
    user: str
    timeout: float = DEFAULT_TIMEOUT
    api_root: str = DEFAULT_API_ROOT

    def validate(self) -> None:
        """Check that the config can drive a client.

        :raises ValueError: On an empty host list, empty user or non-positive timeout.
        """
        if not self.hosts:
            raise ValueError("At least one host is required")
        for host in self.hosts:
            if not host or not host.strip():
                raise ValueError(f"Hosts must be non-empty strings, got {list(self.hosts)!r}")
        if not self.user or not self.user.strip():
            raise ValueError("user must be a non-empty string")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> ClientConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Dict with ``hosts`` and ``user`` keys and optional
            ``timeout`` and ``api_root``. ``hosts`` may be a list or a
            comma-separated string.
        """
        raw_hosts = data.get("hosts")
        if isinstance(raw_hosts, str):
            hosts = tuple(h.strip() for h in raw_hosts.split(",") if h.strip())
        elif isinstance(raw_hosts, (list, tuple)):
            hosts = tuple(str(h) for h in raw_hosts)
        else:
            msg = "Expected 'hosts' to be a list or a comma-separated string"
            raise TypeError(msg)

        if "user" not in data:
            msg = "Missing required key 'user'"
            raise KeyError(msg)

        config = cls(
            hosts=hosts,
            user=str(data["user"]),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),  # type: ignore[arg-type]
            api_root=str(data.get("api_root", DEFAULT_API_ROOT)),
        )
        config.validate()
        return config
