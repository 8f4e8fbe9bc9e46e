"""
Off-chain Signer Error Model

This module provides the error taxonomy for the signing service. Every failure
of the sign and verify paths is raised as a subclass of ``OffchainError`` and
carries a stable ``ErrorCode`` so the HTTP layer can render it as a structured
body.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import IntEnum


CODESPACE = "offchain"


class ErrorCode(IntEnum):
    """Error codes for the off-chain signing codespace."""

    OK = 0
    UNKNOWN = 1

    # Key material
    INVALID_KEY_FORMAT = 2

    # Envelope construction and decoding
    EMPTY_PAYLOAD = 3
    MALFORMED_ENVELOPE = 4
    MALFORMED_SIGNED_ENVELOPE = 5
    UNSUPPORTED_CONTENT_TYPE = 6

    # Verification
    SIGNER_MISMATCH = 7
    INVALID_SIGNATURE = 8

    # Transport
    IO_READ_FAILURE = 9


class OffchainError(Exception):
    """
    Base class for all off-chain signing errors.

    Provides structured error information that can be serialized into an
    HTTP error body.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an off-chain error.

        Args:
            message: Error message
            code: Error code (defaults to the class code)
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    @property
    def kind(self) -> str:
        """Symbolic name of the error code."""
        return self.code.name

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "codespace": CODESPACE,
            "code": self.code.value,
            "kind": self.kind,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OffchainError':
        """Create the matching error subclass from its dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        error_cls = _ERRORS_BY_CODE.get(code, OffchainError)
        return error_cls(message, code, details)


class InvalidKeyFormatError(OffchainError):
    """Private key bytes do not form a valid secp256k1 scalar."""

    default_code = ErrorCode.INVALID_KEY_FORMAT


class EmptyPayloadError(OffchainError):
    """The data payload to sign is empty."""

    default_code = ErrorCode.EMPTY_PAYLOAD


class MalformedEnvelopeError(OffchainError):
    """An envelope could not be decoded or built."""

    default_code = ErrorCode.MALFORMED_ENVELOPE


class MalformedSignedEnvelopeError(OffchainError):
    """A decoded envelope violates the structural rules of a signed envelope."""

    default_code = ErrorCode.MALFORMED_SIGNED_ENVELOPE


class UnsupportedContentTypeError(OffchainError):
    """The declared media type has no codec."""

    default_code = ErrorCode.UNSUPPORTED_CONTENT_TYPE


class SignerMismatchError(OffchainError):
    """The attached public key does not derive the declared signer address."""

    default_code = ErrorCode.SIGNER_MISMATCH


class InvalidSignatureError(OffchainError):
    """Signature verification failed."""

    default_code = ErrorCode.INVALID_SIGNATURE


class IOReadError(OffchainError):
    """The request body could not be read."""

    default_code = ErrorCode.IO_READ_FAILURE


_ERRORS_BY_CODE = {
    ErrorCode.INVALID_KEY_FORMAT: InvalidKeyFormatError,
    ErrorCode.EMPTY_PAYLOAD: EmptyPayloadError,
    ErrorCode.MALFORMED_ENVELOPE: MalformedEnvelopeError,
    ErrorCode.MALFORMED_SIGNED_ENVELOPE: MalformedSignedEnvelopeError,
    ErrorCode.UNSUPPORTED_CONTENT_TYPE: UnsupportedContentTypeError,
    ErrorCode.SIGNER_MISMATCH: SignerMismatchError,
    ErrorCode.INVALID_SIGNATURE: InvalidSignatureError,
    ErrorCode.IO_READ_FAILURE: IOReadError,
}


@dataclass(frozen=True)
class ErrorResult:
    """
    Tagged failure result handed to the transport layer.

    Exactly one of ``error`` (a structured domain error) or ``message`` (a
    plain-text fallback) is set. The tag is chosen where the failure is
    caught, so the renderer never has to inspect exception types.
    """

    error: Optional[OffchainError] = None
    message: Optional[str] = None

    @classmethod
    def structured(cls, error: OffchainError) -> 'ErrorResult':
        return cls(error=error)

    @classmethod
    def plain(cls, message: str) -> 'ErrorResult':
        return cls(message=message)

    @property
    def is_structured(self) -> bool:
        return self.error is not None

    def body(self) -> Any:
        """Structured dict for domain errors, plain string otherwise."""
        if self.error is not None:
            return self.error.to_dict()
        return self.message or ""


__all__ = [
    "CODESPACE",
    "ErrorCode",
    "OffchainError",
    "InvalidKeyFormatError",
    "EmptyPayloadError",
    "MalformedEnvelopeError",
    "MalformedSignedEnvelopeError",
    "UnsupportedContentTypeError",
    "SignerMismatchError",
    "InvalidSignatureError",
    "IOReadError",
    "ErrorResult",
]
