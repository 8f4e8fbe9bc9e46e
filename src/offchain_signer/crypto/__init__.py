"""
Cryptographic primitives for off-chain signing.

Provides the secp256k1 signing identity and public-key verification.
"""

from .secp256k1 import (
    PRIVATE_KEY_LENGTH,
    PUBLIC_KEY_LENGTH,
    SIGNATURE_LENGTH,
    Secp256k1PrivateKey,
    Secp256k1PublicKey,
    derive_identity,
)

__all__ = [
    "PRIVATE_KEY_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "derive_identity",
]
