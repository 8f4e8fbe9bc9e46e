"""
Signing infrastructure for off-chain envelopes.

Provides the signer (sign path) and verifier (verify path).
"""

from .signer import Signer
from .verifier import Verifier

__all__ = [
    "Signer",
    "Verifier",
]
