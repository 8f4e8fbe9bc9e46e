"""
Bech32 address rendering.

Signer addresses travel as raw 20-byte values in the binary encoding and as
bech32 strings (``cosmos1...``) in the JSON encoding.
"""

from bech32 import bech32_decode, bech32_encode, convertbits

from ..runtime.errors import MalformedEnvelopeError
from ..tx.types import ADDRESS_LENGTH


def to_bech32(address: bytes, prefix: str) -> str:
    """
    Render a 20-byte address as a bech32 string.

    Args:
        address: Raw address bytes
        prefix: Human-readable part, e.g. ``cosmos``

    Returns:
        Bech32 encoded address

    Raises:
        MalformedEnvelopeError: If the address has the wrong length
    """
    if len(address) != ADDRESS_LENGTH:
        raise MalformedEnvelopeError(
            f"address must be {ADDRESS_LENGTH} bytes, got {len(address)}"
        )
    return bech32_encode(prefix, convertbits(address, 8, 5))


def from_bech32(text: str, prefix: str) -> bytes:
    """
    Parse a bech32 address and check its human-readable part.

    Args:
        text: Bech32 encoded address
        prefix: Expected human-readable part

    Returns:
        Raw address bytes

    Raises:
        MalformedEnvelopeError: On a bad checksum, wrong prefix or wrong length
    """
    hrp, data = bech32_decode(text)
    if hrp is None or data is None:
        raise MalformedEnvelopeError(f"invalid bech32 address: {text!r}")
    if hrp != prefix:
        raise MalformedEnvelopeError(
            f"invalid address prefix: expected {prefix!r}, got {hrp!r}"
        )
    decoded = convertbits(data, 5, 8, False)
    if decoded is None or len(decoded) != ADDRESS_LENGTH:
        raise MalformedEnvelopeError(f"invalid address length in {text!r}")
    return bytes(decoded)
