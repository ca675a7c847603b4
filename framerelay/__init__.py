"""
Public API:
- Relay: one connection; connect/close, send(*frames), wait_frame()
- create_relay: one-liner factory from "tcp://host:port" or "unix:///path"
- Frame, FrameFlag: the message unit (flags byte + opaque body)
- ConnectionEndpoint, EndpointKind: what to connect to
- Transport: abstract stream primitives; SocketTransport is the stdlib one
- pack_frame, unpack_frame, pack_prefix, unpack_prefix: 17-byte prefix framing
- RelayError and subclasses: error taxonomy
"""

# Core runtime
from .relay import BUFFER_SIZE, Relay
from .factory import create_relay

# Frame & endpoint types
from .frame import Frame, FrameFlag
from .endpoint import ConnectionEndpoint, EndpointKind

# Transport contract
from .transport import Transport
from .transports.sockets import SocketTransport

# Framing helpers
from .wire import PREFIX_SIZE, pack_frame, pack_prefix, unpack_frame, unpack_prefix

# Errors
from .errors import (
    ConfigurationError,
    PrefixError,
    ProtocolError,
    RelayConnectionError,
    RelayError,
    TransportError,
)

__all__ = [
    "Relay",
    "BUFFER_SIZE",
    "create_relay",
    "Frame",
    "FrameFlag",
    "ConnectionEndpoint",
    "EndpointKind",
    "Transport",
    "SocketTransport",
    "PREFIX_SIZE",
    "pack_frame",
    "unpack_frame",
    "pack_prefix",
    "unpack_prefix",
    "RelayError",
    "ConfigurationError",
    "RelayConnectionError",
    "ProtocolError",
    "PrefixError",
    "TransportError",
]

__version__ = "0.1.0"
