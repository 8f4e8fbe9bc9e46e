"""Runtime helpers for the off-chain signer"""

from .errors import (
    ErrorCode,
    ErrorResult,
    OffchainError,
    InvalidKeyFormatError,
    EmptyPayloadError,
    MalformedEnvelopeError,
    MalformedSignedEnvelopeError,
    UnsupportedContentTypeError,
    SignerMismatchError,
    InvalidSignatureError,
    IOReadError,
)

__all__ = [
    "ErrorCode",
    "ErrorResult",
    "OffchainError",
    "InvalidKeyFormatError",
    "EmptyPayloadError",
    "MalformedEnvelopeError",
    "MalformedSignedEnvelopeError",
    "UnsupportedContentTypeError",
    "SignerMismatchError",
    "InvalidSignatureError",
    "IOReadError",
]
