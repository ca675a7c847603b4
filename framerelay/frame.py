from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Optional

# Frame flags (one byte on the wire)
class FrameFlag(IntFlag):
    NONE       = 0x00
    ERROR      = 0x01      # error/control payload
    EMPTY      = 0x02      # reserved: body intentionally absent
    COMPRESSED = 0x04      # reserved: body compressed by the layer above

@dataclass(frozen=True)
class Frame:
    """
    One message unit: flags byte + opaque body.
    'options' rides along in memory only; it is not written to the wire.
    """
    flags: int = 0
    body: bytes = b""
    options: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.flags, int) or not 0 <= self.flags <= 0xFF:
            raise ValueError(f"flags must fit in one byte, got {self.flags!r}")
        if self.options is not None and (isinstance(self.options, bool)
                or not isinstance(self.options, int) or self.options < 0):
            raise ValueError(f"options must be unsigned, got {self.options!r}")

        object.__setattr__(self, "flags", int(self.flags))

        body = self.body
        if body is None:
            body = b""
        elif isinstance(body, str):
            body = body.encode("utf-8")
        elif not isinstance(body, bytes):
            body = bytes(body)
        object.__setattr__(self, "body", body)

    @property
    def size(self) -> int:
        return len(self.body)

    @property
    def is_error(self) -> bool:
        return bool(self.flags & FrameFlag.ERROR)

    def has_flag(self, flag: int) -> bool:
        return (self.flags & flag) == flag

    @classmethod
    def error(cls, message: str, flags: int = 0) -> "Frame":
        return cls(flags=flags | FrameFlag.ERROR, body=message.encode("utf-8"))

    def __repr__(self) -> str:
        return f"Frame(flags=0x{int(self.flags):02x}, size={self.size}, options={self.options!r})"
