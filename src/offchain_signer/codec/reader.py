"""
Binary Reader - protobuf wire format

Decodes the protobuf subset written by ``BinaryWriter``. Any structural
problem (truncation, overflow, unsupported wire type) raises
``MalformedEnvelopeError``.
"""

import builtins
from typing import Iterator, Tuple, Union

from ..runtime.errors import MalformedEnvelopeError
from .writer import WIRE_LEN, WIRE_VARINT

MAX_VARINT_LEN = 10


class BinaryReader:
    """
    Binary reader over a protobuf-encoded buffer.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = buf
        self._off = 0

    @property
    def eof(self) -> bool:
        """True when the whole buffer has been consumed."""
        return self._off >= len(self._buf)

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        if self._off >= len(self._buf):
            raise MalformedEnvelopeError("unexpected end of buffer")
        val = self._buf[self._off]
        self._off += 1
        return val

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value (at most 64 bits)
        """
        x = 0
        s = 0
        for i in range(MAX_VARINT_LEN):
            b = self.u8()
            if b < 0x80:
                if i == MAX_VARINT_LEN - 1 and b > 1:
                    raise MalformedEnvelopeError("varint overflows uint64")
                return x | (b << s)
            x |= (b & 0x7F) << s
            s += 7
        raise MalformedEnvelopeError("varint overflows uint64")

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        if self._off + n > len(self._buf):
            raise MalformedEnvelopeError(f"length {n} exceeds remaining buffer")
        out = builtins.bytes(self._buf[self._off : self._off + n])
        self._off += n
        return out

    def len_prefixed_bytes(self) -> builtins.bytes:
        """
        Read bytes with length prefix using uvarint.

        Returns:
            Bytes with length read from uvarint prefix
        """
        n = self.uvarint()
        return self.bytes(n)

    def tag(self) -> Tuple[int, int]:
        """
        Read a field key.

        Returns:
            Tuple of (field_number, wire_type)
        """
        key = self.uvarint()
        field, wire_type = key >> 3, key & 0x7
        if field == 0:
            raise MalformedEnvelopeError("invalid field number 0")
        return field, wire_type

    def fields(self) -> Iterator[Tuple[int, int, Union[int, builtins.bytes]]]:
        """
        Iterate over the remaining fields.

        Yields:
            Tuples of (field_number, wire_type, value) where value is an int
            for varint fields and bytes for length-delimited fields
        """
        while not self.eof:
            field, wire_type = self.tag()
            if wire_type == WIRE_VARINT:
                yield field, wire_type, self.uvarint()
            elif wire_type == WIRE_LEN:
                yield field, wire_type, self.len_prefixed_bytes()
            else:
                raise MalformedEnvelopeError(
                    f"unsupported wire type {wire_type} for field {field}"
                )
