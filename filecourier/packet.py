"""Datagram layout used by the UDP transfer: a numbered chunk of a file."""

import struct
from dataclasses import dataclass

HEADER = struct.Struct("<II")
HEADER_SIZE = HEADER.size
DATAGRAM_SIZE = 1400
PAYLOAD_SIZE = DATAGRAM_SIZE - HEADER_SIZE
_MAX_NUMBER = 0xFFFFFFFF


@dataclass(frozen=True)
class Packet:
    """One numbered chunk; a packet without data marks the end of a file."""

    number: int
    data: bytes = b""

    def __post_init__(self):
        if not 0 <= self.number <= _MAX_NUMBER:
            raise ValueError(f"packet number out of range: {self.number}")
        if len(self.data) > _MAX_NUMBER:
            raise ValueError("packet data too large")
        object.__setattr__(self, "data", bytes(self.data))

    def encode(self):
        """Return the wire form: number, data size, then the data."""
        return HEADER.pack(self.number, len(self.data)) + self.data

    @classmethod
    def decode(cls, data):
        """Parse a datagram; bytes after the announced data are ignored."""
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise ValueError(
                f"datagram too short for a packet header: {len(data)} bytes"
            )
        number, size = HEADER.unpack_from(data)
        payload = data[HEADER_SIZE:HEADER_SIZE + size]
        if len(payload) != size:
            raise ValueError(
                f"packet announces {size} bytes but carries {len(payload)}"
            )
        return cls(number, payload)

    def is_end(self):
        """Tell whether this is the end-of-file marker."""
        return not self.data