"""
Envelope builder for off-chain signing.

Constructs the canonical unsigned envelope around a single ``MsgSignData``.
Memo, timeout and fee are fixed to neutral values so the signing payload never
depends on ledger state.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from ..runtime.errors import EmptyPayloadError, MalformedEnvelopeError
from .types import ADDRESS_LENGTH, Envelope, Fee, MsgSignData

logger = logging.getLogger(__name__)


def _as_bytes(data: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


def build_unsigned(address: bytes, data: Union[bytes, bytearray, str]) -> Envelope:
    """
    Build the unsigned envelope for ``address`` attesting to ``data``.

    Args:
        address: 20-byte signer address
        data: Payload; strings are UTF-8 encoded

    Returns:
        Envelope holding exactly one message

    Raises:
        EmptyPayloadError: If data is empty
        MalformedEnvelopeError: If the address has the wrong length
    """
    payload = _as_bytes(data)
    if not payload:
        raise EmptyPayloadError("data payload must not be empty")
    if len(address) != ADDRESS_LENGTH:
        raise MalformedEnvelopeError(
            f"signer address must be {ADDRESS_LENGTH} bytes, got {len(address)}"
        )
    msg = MsgSignData(signer=bytes(address), data=payload)
    logger.debug(f"Built unsigned envelope for {address.hex()} ({len(payload)} bytes)")
    return Envelope(messages=(msg,), memo="", timeout_height=0, fee=Fee())


class EnvelopeBuilder:
    """
    Fluent builder for unsigned envelopes.

    Example:
        >>> envelope = EnvelopeBuilder().with_signer(address).with_data("hello").build()
    """

    def __init__(self):
        self._signer: Optional[bytes] = None
        self._data: bytes = b""

    def with_signer(self, address: bytes) -> EnvelopeBuilder:
        """Set the declared signer address."""
        self._signer = bytes(address)
        return self

    def with_data(self, data: Union[bytes, bytearray, str]) -> EnvelopeBuilder:
        """Set the payload to attest to."""
        self._data = _as_bytes(data)
        return self

    def build(self) -> Envelope:
        """
        Build the envelope.

        Raises:
            MalformedEnvelopeError: If no signer was set
            EmptyPayloadError: If no data was set
        """
        if self._signer is None:
            raise MalformedEnvelopeError("signer address is required")
        return build_unsigned(self._signer, self._data)


__all__ = [
    "build_unsigned",
    "EnvelopeBuilder",
]
