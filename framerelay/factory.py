
from __future__ import annotations
import logging
from typing import Optional, Union

from .endpoint import ConnectionEndpoint
from .relay import BUFFER_SIZE, Relay
from .transport import Transport
from .transports.sockets import SocketTransport

log = logging.getLogger(__name__)

def create_relay(connection: Union[str, ConnectionEndpoint],
                 *,
                 transport: Optional[Transport] = None,
                 timeout: Optional[float] = None,
                 buffer_size: int = BUFFER_SIZE,
                 auto_connect: bool = False) -> Relay:
    """
    One-liner factory:
      create_relay("tcp://127.0.0.1:7000")
      create_relay("unix:///tmp/rpc.sock", timeout=5.0, auto_connect=True)
      create_relay(ConnectionEndpoint("localhost", 7000), transport=my_transport)

    - connection: DSN string or ConnectionEndpoint
    - transport: Transport instance; default is a SocketTransport
    - timeout: socket timeout in seconds for the default transport (ignored with transport=)
    - buffer_size: max bytes requested per body read
    - auto_connect: connect before returning
    """
    # Resolve endpoint
    if isinstance(connection, str):
        endpoint = ConnectionEndpoint.parse(connection)
    else:
        endpoint = connection

    # Resolve transport
    if transport is None:
        t = SocketTransport(timeout=timeout)
    else:
        if timeout is not None:
            log.debug("timeout=%s ignored, explicit transport given", timeout)
        t = transport

    relay = Relay(endpoint, t, buffer_size=buffer_size)

    if auto_connect:
        relay.connect()

    return relay
