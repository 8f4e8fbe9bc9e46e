"""
Hash Functions

SHA-256 and RIPEMD-160 helpers used for signing digests and for deriving
signer addresses from secp256k1 public keys.
"""

import hashlib

from Crypto.Hash import RIPEMD160


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def ripemd160_bytes(input_bytes: bytes) -> bytes:
    """
    Compute RIPEMD-160 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        RIPEMD-160 hash as bytes (20 bytes)
    """
    return RIPEMD160.new(data=input_bytes).digest()


def address_hash(public_key_bytes: bytes) -> bytes:
    """
    Compute the Bitcoin-style public key hash: RIPEMD-160(SHA-256(pubkey)).

    This is the address of a secp256k1 signer.

    Args:
        public_key_bytes: Compressed public key bytes

    Returns:
        20-byte address
    """
    return ripemd160_bytes(sha256_bytes(public_key_bytes))
