from __future__ import annotations
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Tuple, Union
from urllib.parse import urlsplit

from .errors import ConfigurationError

# Supported endpoint kinds (value doubles as the DSN scheme)
class EndpointKind(StrEnum):
    NETWORK = "tcp"
    LOCAL   = "unix"

@dataclass(frozen=True)
class ConnectionEndpoint:
    """
    What to connect to. Examples:
      ConnectionEndpoint("localhost", 7000)
      ConnectionEndpoint("/tmp/rpc.sock", kind=EndpointKind.LOCAL)
    Port is required for NETWORK and dropped for LOCAL.
    """
    address: str
    port: Optional[int] = None
    kind: EndpointKind = EndpointKind.NETWORK

    def __post_init__(self):
        try:
            kind = EndpointKind(self.kind)
        except ValueError:
            raise ConfigurationError(
                f"undefined connection type {self.kind!r} on '{self.address}'") from None
        object.__setattr__(self, "kind", kind)

        if not self.address:
            raise ConfigurationError("no address given")
        if not isinstance(self.address, str) or "\x00" in self.address:
            raise ConfigurationError(f"invalid address {self.address!r}")

        if kind == EndpointKind.LOCAL:
            object.__setattr__(self, "port", None)
            return

        if self.port is None:
            raise ConfigurationError(f"no port given for TCP socket on '{self.address}'")
        if isinstance(self.port, bool) or not isinstance(self.port, int) \
                or not 0 <= self.port <= 65535:
            raise ConfigurationError(
                f"invalid port {self.port!r} given for TCP socket on '{self.address}'")

    @property
    def sockaddr(self) -> Union[str, Tuple[str, int]]:
        if self.kind == EndpointKind.LOCAL:
            return self.address
        return (self.address, self.port)

    def __str__(self) -> str:
        if self.kind == EndpointKind.NETWORK:
            return f"tcp://{self.address}:{self.port}"
        return f"unix://{self.address}"

    @classmethod
    def parse(cls, dsn: str) -> "ConnectionEndpoint":
        """
        Inverse of str():
          "tcp://127.0.0.1:7000" -> NETWORK
          "unix:///tmp/rpc.sock" -> LOCAL
        """
        scheme, sep, rest = dsn.partition("://")
        if not sep:
            raise ConfigurationError(f"malformed connection string '{dsn}'")
        try:
            kind = EndpointKind(scheme.lower())
        except ValueError:
            raise ConfigurationError(f"unsupported scheme '{scheme}' in '{dsn}'") from None

        if kind == EndpointKind.LOCAL:
            return cls(rest, None, kind)

        parts = urlsplit(dsn)
        try:
            port = parts.port
        except ValueError:
            raise ConfigurationError(f"invalid port in '{dsn}'") from None
        return cls(parts.hostname or "", port, kind)
