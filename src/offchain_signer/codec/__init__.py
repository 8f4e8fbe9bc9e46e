"""
Envelope Codec Module

Provides the wire codecs and canonical signing payload for off-chain
envelopes.

Key components:
- writer.py / reader.py: protobuf wire-format primitives
- envelope_codec.py: JSON and binary envelope codecs, sign bytes, content-type routing
- address.py: bech32 rendering of signer addresses
- hashes.py: SHA-256 / RIPEMD-160 helpers
"""

from .hashes import address_hash, ripemd160_bytes, sha256_bytes
from .address import from_bech32, to_bech32
from .reader import BinaryReader
from .writer import BinaryWriter
from .envelope_codec import JSON_CONTENT_TYPE, PROTOBUF_CONTENT_TYPE, EnvelopeCodec, media_type

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "EnvelopeCodec",
    "JSON_CONTENT_TYPE",
    "PROTOBUF_CONTENT_TYPE",
    "address_hash",
    "from_bech32",
    "media_type",
    "ripemd160_bytes",
    "sha256_bytes",
    "to_bech32",
]
