"""
Frame layout on the stream:

[ prefix: 1 + 8 + 8 bytes                                   ][ body: size bytes ]
[ flags uint8 ][ size uint64 LE ][ check uint64 BE (== size) ]

'check' is the size again in the opposite byte order. It catches endianness
mismatches and gross prefix corruption, nothing more.
"""
from __future__ import annotations
import struct
from typing import Tuple

from .errors import PrefixError, ProtocolError
from .frame import Frame

_HEAD  = struct.Struct("<BQ")    # flags, size (little-endian)
_CHECK = struct.Struct(">Q")     # size again (big-endian)

PREFIX_SIZE = _HEAD.size + _CHECK.size    # 17 bytes
MAX_SIZE = 0xFFFFFFFFFFFFFFFF

def pack_prefix(flags: int, size: int) -> bytes:
    if not 0 <= flags <= 0xFF:
        raise ProtocolError(f"frame flags out of range: {flags}")
    if not 0 <= size <= MAX_SIZE:
        raise ProtocolError(f"frame size out of range: {size}")
    return _HEAD.pack(flags, size) + _CHECK.pack(size)

def unpack_prefix(prefix: bytes) -> Tuple[int, int]:
    """Decode a 17-byte prefix into (flags, size)."""
    if len(prefix) != PREFIX_SIZE:
        raise PrefixError("invalid prefix")
    flags, size = _HEAD.unpack_from(prefix, 0)
    (check,) = _CHECK.unpack_from(prefix, _HEAD.size)
    if size != check:
        raise PrefixError("invalid prefix (checksum)")
    return flags, size

def pack_frame(frame: Frame) -> bytes:
    return pack_prefix(frame.flags, len(frame.body)) + frame.body

def unpack_frame(data: bytes) -> Frame:
    flags, size = unpack_prefix(data[:PREFIX_SIZE])
    body = data[PREFIX_SIZE:]
    if len(body) != size:
        raise ProtocolError(f"frame body is {len(body)} bytes, prefix says {size}")
    return Frame(flags=flags, body=bytes(body))
