from __future__ import annotations


class RelayError(Exception):
    """Base class for everything the relay raises."""


class ConfigurationError(RelayError, ValueError):
    """Invalid endpoint or relay arguments. Always a caller bug."""


class RelayConnectionError(RelayError, ConnectionError):
    """Socket allocation or connect failed."""


class ProtocolError(RelayError):
    pass


class PrefixError(ProtocolError):
    """Malformed, short or inconsistent frame prefix; the stream is desynchronized."""


class TransportError(RelayError):
    """Write or close failed, or close() was called on a closed relay."""
