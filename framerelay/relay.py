from __future__ import annotations
import logging
from typing import Optional

from .endpoint import ConnectionEndpoint, EndpointKind
from .errors import (
    ConfigurationError,
    PrefixError,
    RelayConnectionError,
    RelayError,
    TransportError,
)
from .frame import Frame
from .transport import Handle, Transport
from .transports.sockets import SocketTransport
from .wire import PREFIX_SIZE, pack_frame, unpack_prefix

log = logging.getLogger(__name__)

BUFFER_SIZE = 65536


class Relay:

    # Notes:
    # - One relay = one connection = one exclusively owned handle
    # - DISCONNECTED -> connect() -> CONNECTED -> close() -> DISCONNECTED
    # - send()/wait_frame() connect on demand; connect() is a no-op when connected
    # - No retries, no reconnects: a PrefixError means the stream is desynchronized,
    #   the caller has to close() and connect() again
    # - Not thread-safe; serialize access from outside

    def __init__(self, endpoint: ConnectionEndpoint,
                 transport: Optional[Transport] = None, *,
                 buffer_size: int = BUFFER_SIZE):
        if not isinstance(endpoint, ConnectionEndpoint):
            raise ConfigurationError(f"expected a ConnectionEndpoint, got {type(endpoint).__name__}")
        if buffer_size <= 0:
            raise ConfigurationError(f"buffer_size must be positive, got {buffer_size}")
        if transport is None:
            transport = SocketTransport()

        self.endpoint = endpoint
        self.t = transport
        self.buffer_size = buffer_size

        self._connected = False
        self._handle: Optional[Handle] = None

    @property
    def address(self) -> str:
        return self.endpoint.address

    @property
    def port(self) -> Optional[int]:
        return self.endpoint.port

    @property
    def kind(self) -> EndpointKind:
        return self.endpoint.kind

    @property
    def connected(self) -> bool:
        return self._connected

    def __str__(self) -> str:
        return str(self.endpoint)

    def __repr__(self) -> str:
        state = "connected" if self._connected else "disconnected"
        return f"<Relay {self.endpoint} {state}>"

    # ---- lifecycle ----
    def connect(self) -> bool:
        """
        Ensure the socket is connected. Returns True if it connected now or
        already was. Raises RelayConnectionError and stays disconnected otherwise.
        """
        if self._connected:
            return True

        try:
            handle = self.t.create(self.endpoint.kind)
        except OSError as ex:
            log.warning("unable to create socket %s: %s", self, ex)
            raise RelayConnectionError(f"unable to create socket {self}: {ex}") from ex

        try:
            self.t.connect(handle, self.endpoint)
        except OSError as ex:
            log.warning("unable to establish connection %s: %s", self, ex)
            self._release(handle)
            raise RelayConnectionError(f"unable to establish connection {self}: {ex}") from ex
        except BaseException:
            self._release(handle)
            raise

        self._handle = handle
        self._connected = True
        log.info("relay connected to %s", self)
        return True

    def close(self) -> None:
        if not self._connected:
            raise TransportError(f"unable to close socket '{self}', socket already closed")

        handle, self._handle = self._handle, None
        self._connected = False
        try:
            self.t.close(handle)
        except OSError as ex:
            raise TransportError(f"unable to close socket '{self}': {ex}") from ex
        log.info("relay closed %s", self)

    def _release(self, handle: Handle) -> None:
        # half-open handle after a failed connect; the connect error is what the caller sees
        try:
            self.t.close(handle)
        except OSError as ex:
            log.debug("closing half-open socket %s failed: %s", self, ex)

    def __enter__(self) -> "Relay":
        return self

    def __exit__(self, *_):
        if self._connected:
            self.close()

    def __del__(self):
        if getattr(self, "_connected", False):
            try:
                self.close()
            except RelayError as ex:
                log.debug("implicit close of %s failed: %s", self, ex)

    # ---- frames ----
    def send(self, *frames: Frame) -> None:
        """Encode the frames in order and write them with a single write."""
        self.connect()

        data = b"".join(pack_frame(f) for f in frames)
        if not data:
            return

        try:
            written = self.t.send_all(self._handle, data)
        except OSError as ex:
            log.warning("write to %s failed: %s", self, ex)
            raise TransportError(f"unable to write payload to the stream: {ex}") from ex
        if written != len(data):
            raise TransportError(
                f"unable to write payload to the stream: {written} of {len(data)} bytes written")

    def wait_frame(self) -> Frame:
        """
        Block until one whole frame has been read.
        Any short or failed read raises PrefixError; nothing is kept for a retry.
        """
        self.connect()

        prefix = self._recv(PREFIX_SIZE)
        if len(prefix) != PREFIX_SIZE:
            raise PrefixError(
                f"unable to read prefix from socket: got {len(prefix)} of {PREFIX_SIZE} bytes")
        flags, size = unpack_prefix(prefix)

        if size == 0:
            return Frame(flags=flags, body=b"")

        body = bytearray()
        remaining = size
        while remaining > 0:
            chunk = self._recv(min(self.buffer_size, remaining))
            if not chunk:
                raise PrefixError(
                    f"unable to read frame body from socket: {size - remaining} of {size} bytes read")
            body += chunk
            remaining -= len(chunk)

        return Frame(flags=flags, body=bytes(body))

    def _recv(self, size: int) -> bytes:
        try:
            data = self.t.recv_exact(self._handle, size)
        except OSError as ex:
            log.warning("read from %s failed: %s", self, ex)
            raise PrefixError(f"unable to read prefix from socket: {ex}") from ex
        return data if data is not None else b""
