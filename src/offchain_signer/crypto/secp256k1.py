"""
SECP256K1 cryptographic operations for off-chain signing.

Provides the signing identity derived from a raw private key: a compressed
public key, a Bitcoin-style address and 64-byte ``r||s`` signatures over a
32-byte digest. Signatures are normalized to low-S form and verification
rejects high-S (malleable) signatures.
"""

from __future__ import annotations
import hashlib

from ecdsa import SECP256k1, BadDigestError, BadSignatureError, MalformedPointError, SigningKey, VerifyingKey
from ecdsa.util import MalformedSignature, sigdecode_string, sigencode_string_canonize

from ..codec.hashes import address_hash
from ..runtime.errors import InvalidKeyFormatError

PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 33
SIGNATURE_LENGTH = 64
DIGEST_LENGTH = 32

CURVE_ORDER = SECP256k1.order
HALF_CURVE_ORDER = CURVE_ORDER // 2


class Secp256k1PublicKey:
    """SECP256K1 public key for verification."""

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize public key.

        Args:
            public_key_bytes: 33-byte compressed public key
        """
        self.public_key_bytes = bytes(public_key_bytes)

    def to_bytes(self) -> bytes:
        """Get public key as bytes."""
        return self.public_key_bytes

    def address(self) -> bytes:
        """20-byte address derived from the public key."""
        return address_hash(self.public_key_bytes)

    def verify(self, signature: bytes, digest: bytes) -> bool:
        """
        Verify a signature against a digest.

        Args:
            signature: 64-byte ``r||s`` signature
            digest: 32-byte message digest

        Returns:
            True if signature is valid, False for any malformed key,
            malformed signature, high-S signature or mismatch
        """
        if len(self.public_key_bytes) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
            return False
        if int.from_bytes(signature[32:], "big") > HALF_CURVE_ORDER:
            return False
        try:
            vk = VerifyingKey.from_string(self.public_key_bytes, curve=SECP256k1)
            return vk.verify_digest(signature, digest, sigdecode=sigdecode_string)
        except (MalformedPointError, MalformedSignature, BadSignatureError, BadDigestError):
            return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Secp256k1PublicKey) and other.public_key_bytes == self.public_key_bytes

    def __hash__(self) -> int:
        return hash(self.public_key_bytes)

    def __str__(self) -> str:
        return f"Secp256k1PublicKey({self.public_key_bytes.hex()[:16]}...)"


class Secp256k1PrivateKey:
    """
    SECP256K1 signing identity.

    Wraps a raw 32-byte private key. The key is held only for the lifetime of
    the object and is never persisted.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize the identity.

        Args:
            private_key_bytes: 32-byte big-endian private scalar

        Raises:
            InvalidKeyFormatError: If the length is wrong or the scalar is
                outside ``[1, n-1]``
        """
        if len(private_key_bytes) != PRIVATE_KEY_LENGTH:
            raise InvalidKeyFormatError(
                f"Private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(private_key_bytes)}",
                details={"length": len(private_key_bytes)},
            )
        secexp = int.from_bytes(private_key_bytes, "big")
        if not 1 <= secexp < CURVE_ORDER:
            raise InvalidKeyFormatError("Private key is not a valid secp256k1 scalar")

        self._private_key_bytes = bytes(private_key_bytes)
        self._signing_key = SigningKey.from_string(self._private_key_bytes, curve=SECP256k1)
        self._public_key = Secp256k1PublicKey(
            self._signing_key.get_verifying_key().to_string("compressed")
        )

    @classmethod
    def generate(cls) -> Secp256k1PrivateKey:
        """Generate a new random key."""
        return cls(SigningKey.generate(curve=SECP256k1).to_string())

    @classmethod
    def from_hex(cls, private_key_hex: str) -> Secp256k1PrivateKey:
        """Create key from a hex string."""
        try:
            private_key_bytes = bytes.fromhex(private_key_hex)
        except ValueError as e:
            raise InvalidKeyFormatError(f"Invalid hex string: {e}", cause=e)
        return cls(private_key_bytes)

    def public_key(self) -> Secp256k1PublicKey:
        """Get the public key."""
        return self._public_key

    def address(self) -> bytes:
        """20-byte address derived from the public key."""
        return self._public_key.address()

    def sign(self, digest: bytes) -> bytes:
        """
        Sign a 32-byte digest.

        Args:
            digest: Message digest (SHA-256 of the canonical payload)

        Returns:
            64-byte low-S ``r||s`` signature
        """
        if len(digest) != DIGEST_LENGTH:
            raise ValueError(f"Digest must be {DIGEST_LENGTH} bytes, got {len(digest)}")
        return self._signing_key.sign_digest_deterministic(
            digest,
            hashfunc=hashlib.sha256,
            sigencode=sigencode_string_canonize,
        )

    def to_hex(self) -> str:
        """Get private key as hex string."""
        return self._private_key_bytes.hex()

    def to_bytes(self) -> bytes:
        """Get private key as bytes."""
        return self._private_key_bytes

    def __str__(self) -> str:
        return f"Secp256k1PrivateKey(public={self._public_key.to_bytes().hex()[:16]}...)"

    __repr__ = __str__


def derive_identity(raw_private_key: bytes) -> Secp256k1PrivateKey:
    """
    Wrap raw private key bytes into a signing identity.

    Args:
        raw_private_key: 32 raw key bytes

    Returns:
        The signing identity

    Raises:
        InvalidKeyFormatError: If the bytes are not a valid private key
    """
    return Secp256k1PrivateKey(raw_private_key)


__all__ = [
    "PRIVATE_KEY_LENGTH",
    "PUBLIC_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "derive_identity",
]
