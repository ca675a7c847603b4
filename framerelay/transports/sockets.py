from __future__ import annotations
import logging
import socket
from typing import Optional

from ..endpoint import ConnectionEndpoint, EndpointKind
from ..transport import Transport

log = logging.getLogger(__name__)

class SocketTransport(Transport):
    """Transport over stdlib stream sockets.

    Mapping:
    - NETWORK -> AF_INET / SOCK_STREAM / TCP, connected to (address, port)
    - LOCAL   -> AF_UNIX / SOCK_STREAM, connected to the filesystem path

    timeout is applied to every socket this transport creates (None = block forever).
    A timed-out call raises socket.timeout, which is an OSError like any other failure.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def create(self, kind: EndpointKind) -> socket.socket:
        if kind == EndpointKind.LOCAL:
            family = getattr(socket, "AF_UNIX", None)
            if family is None:
                raise OSError("unix sockets are not supported on this platform")
            sock = socket.socket(family, socket.SOCK_STREAM)
        else:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        sock.settimeout(self.timeout)
        return sock

    def connect(self, handle: socket.socket, endpoint: ConnectionEndpoint) -> None:
        handle.connect(endpoint.sockaddr)
        log.debug("socket connected to %s", endpoint)

    def send_all(self, handle: socket.socket, data: bytes) -> int:
        handle.sendall(data)
        return len(data)

    def recv_exact(self, handle: socket.socket, size: int) -> bytes:
        buf = bytearray()
        while len(buf) < size:
            chunk = handle.recv(size - len(buf))
            if not chunk:
                # peer closed; caller decides what a short read means
                break
            buf += chunk
        return bytes(buf)

    def close(self, handle: socket.socket) -> None:
        handle.close()
