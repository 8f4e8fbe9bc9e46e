"""
Verifier for off-chain envelopes.

Checks a decoded signed envelope in a single pass. Any failure is terminal
and is raised as a specific error; nothing is retried.
"""

from __future__ import annotations
import logging
from typing import Optional

from ..codec.envelope_codec import EnvelopeCodec
from ..codec.hashes import sha256_bytes
from ..config import SigningConfig
from ..crypto.secp256k1 import Secp256k1PublicKey
from ..runtime.errors import (
    InvalidSignatureError,
    MalformedSignedEnvelopeError,
    SignerMismatchError,
)
from ..tx.types import SUPPORTED_SIGN_MODES, MsgSignData, SignedEnvelope

logger = logging.getLogger(__name__)


class Verifier:
    """
    Off-chain envelope verifier.

    The chain id and account number come from the shared ``SigningConfig``;
    the sequence and sign mode come from the envelope's own signer info.
    """

    def __init__(self, config: SigningConfig, codec: Optional[EnvelopeCodec] = None):
        self.config = config
        self.codec = codec or EnvelopeCodec(config)

    def check_structure(self, signed: SignedEnvelope) -> None:
        """
        Structural checks that precede any cryptography.

        Raises:
            MalformedSignedEnvelopeError: On any violation
        """
        envelope = signed.envelope
        if len(envelope.messages) != 1:
            raise MalformedSignedEnvelopeError(
                f"expected exactly one message, got {len(envelope.messages)}"
            )
        if not envelope.messages[0].data:
            raise MalformedSignedEnvelopeError("message data must not be empty")
        if len(signed.signer_infos) != 1 or len(signed.signatures) != 1:
            raise MalformedSignedEnvelopeError(
                "expected exactly one signer",
                details={
                    "signer_infos": len(signed.signer_infos),
                    "signatures": len(signed.signatures),
                },
            )
        problems = envelope.off_ledger_violations()
        info = signed.signer_infos[0]
        if info.sequence != self.config.sequence:
            problems.append(f"sequence must be {self.config.sequence}")
        if info.mode not in SUPPORTED_SIGN_MODES:
            problems.append(f"unsupported sign mode {info.mode.name}")
        if problems:
            raise MalformedSignedEnvelopeError("; ".join(problems))

    def verify(self, signed: SignedEnvelope) -> MsgSignData:
        """
        Verify a signed envelope.

        Args:
            signed: Decoded signed envelope (from either wire format)

        Returns:
            The verified message; its ``data`` is authentic

        Raises:
            MalformedSignedEnvelopeError: Structural violation
            SignerMismatchError: Public key does not derive the declared address
            InvalidSignatureError: Signature does not verify
        """
        self.check_structure(signed)
        msg = signed.envelope.messages[0]
        info = signed.signer_infos[0]

        public_key = Secp256k1PublicKey(info.public_key)
        derived = public_key.address()
        if derived != msg.signer:
            logger.warning(f"Signer mismatch: declared {msg.signer.hex()}, derived {derived.hex()}")
            raise SignerMismatchError(
                "public key does not match the declared signer",
                details={"declared": msg.signer.hex(), "derived": derived.hex()},
            )

        digest = sha256_bytes(self.codec.sign_bytes(signed.envelope, info))
        if not public_key.verify(signed.signatures[0], digest):
            logger.warning(f"Invalid signature for signer {msg.signer.hex()}")
            raise InvalidSignatureError("signature verification failed")

        logger.debug(f"Verified envelope from {msg.signer.hex()} ({len(msg.data)} bytes)")
        return msg


__all__ = ["Verifier"]
