"""
Off-chain Signer

Signs arbitrary data inside a Cosmos-style off-chain envelope
(``MsgSignData``) with secp256k1 keys, and verifies such envelopes whichever
wire format (JSON or protobuf) carried them.
"""

__version__ = "0.1.0"

from .config import ServerConfig, SigningConfig
from .codec.envelope_codec import EnvelopeCodec
from .crypto.secp256k1 import Secp256k1PrivateKey, Secp256k1PublicKey, derive_identity
from .runtime.errors import ErrorCode, ErrorResult, OffchainError
from .signers import Signer, Verifier
from .tx.builder import EnvelopeBuilder, build_unsigned
from .tx.types import Envelope, MsgSignData, SignedEnvelope, SignerInfo, SignMode

__all__ = [
    "__version__",
    "ServerConfig",
    "SigningConfig",
    "EnvelopeCodec",
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "derive_identity",
    "ErrorCode",
    "ErrorResult",
    "OffchainError",
    "Signer",
    "Verifier",
    "EnvelopeBuilder",
    "build_unsigned",
    "Envelope",
    "MsgSignData",
    "SignedEnvelope",
    "SignerInfo",
    "SignMode",
]
