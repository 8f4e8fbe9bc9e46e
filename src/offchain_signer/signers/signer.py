"""
Signer for off-chain envelopes.

Combines a secp256k1 identity with an unsigned envelope and produces a signed
envelope carrying exactly one signer.

Algorithm:
1. Validate the envelope (one message, non-empty data, signer = identity).
2. Build the signer info (public key, sign mode, sequence) from config.
3. Compute the canonical signing payload.
4. Sign SHA-256(payload) with the identity.
5. Attach the signer info and signature.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from ..codec.envelope_codec import EnvelopeCodec
from ..codec.hashes import sha256_bytes
from ..config import SigningConfig
from ..crypto.secp256k1 import Secp256k1PrivateKey
from ..runtime.errors import EmptyPayloadError, MalformedEnvelopeError, SignerMismatchError
from ..tx.builder import build_unsigned
from ..tx.types import Envelope, SignedEnvelope, SignerInfo

logger = logging.getLogger(__name__)


class Signer:
    """
    Off-chain envelope signer.

    Holds only immutable configuration, so one instance may serve concurrent
    requests.
    """

    def __init__(self, config: SigningConfig, codec: Optional[EnvelopeCodec] = None):
        """
        Initialize the signer.

        Args:
            config: Signing metadata (chain id, account number, sequence, mode)
            codec: Codec used for the canonical payload (built from config if omitted)
        """
        self.config = config
        self.codec = codec or EnvelopeCodec(config)

    def signer_info(self, identity: Secp256k1PrivateKey) -> SignerInfo:
        """Signer info declared for ``identity`` under the configured mode."""
        return SignerInfo(
            public_key=identity.public_key().to_bytes(),
            mode=self.config.sign_mode,
            sequence=self.config.sequence,
        )

    def sign(self, identity: Secp256k1PrivateKey, envelope: Envelope) -> SignedEnvelope:
        """
        Sign an unsigned envelope.

        Args:
            identity: Signing identity
            envelope: Envelope holding exactly one message declared by ``identity``

        Returns:
            Signed envelope with one signer info and one signature

        Raises:
            MalformedEnvelopeError: If the envelope does not hold exactly one
                message or carries non-neutral metadata
            EmptyPayloadError: If the message data is empty
            SignerMismatchError: If the message signer is not the identity's address
        """
        if len(envelope.messages) != 1:
            raise MalformedEnvelopeError(
                f"envelope must contain exactly one message, got {len(envelope.messages)}"
            )
        msg = envelope.messages[0]
        if not msg.data:
            raise EmptyPayloadError("data payload must not be empty")
        problems = envelope.off_ledger_violations()
        if problems:
            raise MalformedEnvelopeError("; ".join(problems))
        address = identity.address()
        if msg.signer != address:
            raise SignerMismatchError(
                "message signer does not match signing key",
                details={"declared": msg.signer.hex(), "derived": address.hex()},
            )

        info = self.signer_info(identity)
        digest = sha256_bytes(self.codec.sign_bytes(envelope, info))
        signature = identity.sign(digest)
        logger.debug(f"Signed envelope for {address.hex()} using {info.mode.name}")
        return SignedEnvelope(envelope=envelope, signer_infos=(info,), signatures=(signature,))

    def sign_data(self, identity: Secp256k1PrivateKey, data: Union[bytes, str]) -> SignedEnvelope:
        """
        Build and sign an envelope attesting to ``data`` in one step.

        Raises:
            EmptyPayloadError: If data is empty
        """
        return self.sign(identity, build_unsigned(identity.address(), data))


__all__ = ["Signer"]
