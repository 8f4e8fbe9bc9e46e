"""
Shared fixtures: a fixed signing identity, the default signing config and
the codec, signer and verifier built from it.
"""

import hashlib

import pytest

from offchain_signer.codec.envelope_codec import EnvelopeCodec
from offchain_signer.config import SigningConfig
from offchain_signer.crypto.secp256k1 import Secp256k1PrivateKey
from offchain_signer.signers import Signer, Verifier


@pytest.fixture
def private_key_bytes():
    """Deterministic 32-byte private key."""
    return hashlib.sha256(b"offchain-signer test key").digest()


@pytest.fixture
def identity(private_key_bytes):
    return Secp256k1PrivateKey(private_key_bytes)


@pytest.fixture
def other_identity():
    return Secp256k1PrivateKey(hashlib.sha256(b"offchain-signer other key").digest())


@pytest.fixture
def signing_config():
    return SigningConfig()


@pytest.fixture
def codec(signing_config):
    return EnvelopeCodec(signing_config)


@pytest.fixture
def signer(signing_config, codec):
    return Signer(signing_config, codec)


@pytest.fixture
def verifier(signing_config, codec):
    return Verifier(signing_config, codec)


@pytest.fixture
def signed_hello(signer, identity):
    """Envelope signing b"hello" with the test identity."""
    return signer.sign_data(identity, "hello")
