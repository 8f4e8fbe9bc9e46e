"""
Envelope types and builder for off-chain signing.
"""

from .types import (
    ADDRESS_LENGTH,
    MSG_SIGN_DATA_TYPE_URL,
    SECP256K1_PUBKEY_TYPE_URL,
    SUPPORTED_SIGN_MODES,
    Coin,
    Envelope,
    Fee,
    MsgSignData,
    SignedEnvelope,
    SignerInfo,
    SignMode,
)
from .builder import EnvelopeBuilder, build_unsigned

__all__ = [
    "ADDRESS_LENGTH",
    "MSG_SIGN_DATA_TYPE_URL",
    "SECP256K1_PUBKEY_TYPE_URL",
    "SUPPORTED_SIGN_MODES",
    "Coin",
    "Envelope",
    "Fee",
    "MsgSignData",
    "SignedEnvelope",
    "SignerInfo",
    "SignMode",
    "EnvelopeBuilder",
    "build_unsigned",
]
