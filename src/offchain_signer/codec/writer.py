"""
Binary Writer - protobuf wire format

Implements the subset of the protobuf wire format needed by the envelope:
varints (wire type 0) and length-delimited fields (wire type 2). Fields are
written in the order the caller emits them, so callers emit ascending field
numbers to get a deterministic encoding.
"""

from typing import List

WIRE_VARINT = 0
WIRE_LEN = 2

MAX_UINT64 = 0xFFFFFFFFFFFFFFFF


class BinaryWriter:
    """
    Binary writer producing protobuf-compatible bytes.

    Scalar fields holding their default value (0, empty string, empty bytes)
    are omitted, matching proto3 serialization.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._bb.append(v & 0xFF)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Args:
            v: Unsigned integer value to encode as varint

        Raises:
            ValueError: If the value does not fit in 64 bits
        """
        if v < 0 or v > MAX_UINT64:
            raise ValueError(f"varint out of uint64 range: {v}")
        x = v
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """
        Write bytes with length prefix using uvarint.

        Args:
            v: Bytes to write with length prefix
        """
        self.uvarint(len(v))
        self.bytes(v)

    def tag(self, field: int, wire_type: int) -> None:
        """
        Write a field key.

        Args:
            field: Field number (>= 1)
            wire_type: Wire type

        Raises:
            ValueError: If field number is out of range
        """
        if field < 1 or field > 0x1FFFFFFF:
            raise ValueError(f"Field number is out of range: {field}")
        self.uvarint((field << 3) | wire_type)

    def field_uvarint(self, field: int, v: int) -> None:
        """Write a varint field, omitted when zero."""
        if v == 0:
            return
        self.tag(field, WIRE_VARINT)
        self.uvarint(v)

    def field_bytes(self, field: int, v: bytes, always: bool = False) -> None:
        """
        Write a length-delimited field.

        Args:
            field: Field number
            v: Field payload
            always: Emit even when empty (repeated elements, set sub-messages)
        """
        if not v and not always:
            return
        self.tag(field, WIRE_LEN)
        self.len_prefixed_bytes(v)

    def field_string(self, field: int, s: str) -> None:
        """Write a UTF-8 string field, omitted when empty."""
        self.field_bytes(field, s.encode('utf-8'))

    def field_message(self, field: int, encoded: bytes) -> None:
        """Write an embedded message field; always emitted, even when empty."""
        self.field_bytes(field, encoded, always=True)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
