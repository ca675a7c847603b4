from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

from .endpoint import ConnectionEndpoint, EndpointKind

Handle = Any    # whatever create() hands back; opaque to the relay

class Transport(ABC):
    """
    Byte-stream primitives the relay is built on.
    Failures are reported by raising OSError (or a subclass).
    """

    @abstractmethod
    def create(self, kind: EndpointKind) -> Handle:
        """Allocate an unconnected stream handle for the endpoint kind."""
        raise NotImplementedError

    @abstractmethod
    def connect(self, handle: Handle, endpoint: ConnectionEndpoint) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_all(self, handle: Handle, data: bytes) -> int:
        """Write all of data; returns the number of bytes written."""
        raise NotImplementedError

    @abstractmethod
    def recv_exact(self, handle: Handle, size: int) -> bytes:
        """Block until size bytes arrived; fewer (maybe none) only if the peer hung up."""
        raise NotImplementedError

    @abstractmethod
    def close(self, handle: Handle) -> None:
        raise NotImplementedError
