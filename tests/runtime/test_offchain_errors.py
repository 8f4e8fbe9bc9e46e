"""
Error taxonomy tests.
"""

import pytest

from offchain_signer.runtime.errors import (
    CODESPACE,
    EmptyPayloadError,
    ErrorCode,
    ErrorResult,
    InvalidKeyFormatError,
    InvalidSignatureError,
    IOReadError,
    MalformedEnvelopeError,
    MalformedSignedEnvelopeError,
    OffchainError,
    SignerMismatchError,
    UnsupportedContentTypeError,
)


class TestOffchainError:
    """Structured error behaviour."""

    @pytest.mark.parametrize("cls,code", [
        (InvalidKeyFormatError, ErrorCode.INVALID_KEY_FORMAT),
        (EmptyPayloadError, ErrorCode.EMPTY_PAYLOAD),
        (MalformedEnvelopeError, ErrorCode.MALFORMED_ENVELOPE),
        (MalformedSignedEnvelopeError, ErrorCode.MALFORMED_SIGNED_ENVELOPE),
        (UnsupportedContentTypeError, ErrorCode.UNSUPPORTED_CONTENT_TYPE),
        (SignerMismatchError, ErrorCode.SIGNER_MISMATCH),
        (InvalidSignatureError, ErrorCode.INVALID_SIGNATURE),
        (IOReadError, ErrorCode.IO_READ_FAILURE),
    ])
    def test_default_codes(self, cls, code):
        err = cls("boom")
        assert isinstance(err, OffchainError)
        assert err.code == code
        assert err.kind == code.name

    def test_to_dict(self):
        err = InvalidKeyFormatError("bad key", details={"length": 31})
        assert err.to_dict() == {
            "codespace": CODESPACE,
            "code": ErrorCode.INVALID_KEY_FORMAT.value,
            "kind": "INVALID_KEY_FORMAT",
            "message": "bad key",
            "details": {"length": 31},
        }

    def test_to_dict_with_cause(self):
        err = MalformedEnvelopeError("bad", cause=ValueError("inner"))
        assert err.to_dict()["cause"] == "inner"
        assert "details" not in err.to_dict()

    def test_from_dict_roundtrip(self):
        err = SignerMismatchError("mismatch", details={"declared": "aa"})
        restored = OffchainError.from_dict(err.to_dict())
        assert isinstance(restored, SignerMismatchError)
        assert restored.message == "mismatch"
        assert restored.details == {"declared": "aa"}

    def test_from_dict_unknown_code(self):
        restored = OffchainError.from_dict({"code": 999, "message": "x"})
        assert type(restored) is OffchainError
        assert restored.code == ErrorCode.UNKNOWN

    def test_str(self):
        err = EmptyPayloadError("empty", details={"a": 1})
        assert str(err) == "[EMPTY_PAYLOAD] empty | Details: {'a': 1}"


class TestErrorResult:
    """Tagged failure results."""

    def test_structured(self):
        result = ErrorResult.structured(InvalidSignatureError("bad signature"))
        assert result.is_structured
        assert result.body()["kind"] == "INVALID_SIGNATURE"

    def test_plain(self):
        result = ErrorResult.plain("invalid JSON body")
        assert not result.is_structured
        assert result.body() == "invalid JSON body"
