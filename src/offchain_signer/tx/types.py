"""
Envelope types for off-chain signing.

The envelope reuses the shape of a Cosmos-SDK transaction (body, auth info,
signatures) purely as a signing container. Only one message type exists,
``MsgSignData``, an (address, data) pair meaning "this address attests to this
data".
"""

from __future__ import annotations
from enum import IntEnum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

MSG_SIGN_DATA_TYPE_URL = "/cosmos.offchain.v1alpha1.MsgSignData"
MSG_SIGN_DATA_AMINO_NAME = "cosmos-sdk/MsgSignData"
SECP256K1_PUBKEY_TYPE_URL = "/cosmos.crypto.secp256k1.PubKey"

ADDRESS_LENGTH = 20


class SignMode(IntEnum):
    """
    Signing modes, numbered as in cosmos.tx.signing.v1beta1.SignMode.

    The mode tag travels with every signature so the verifier rebuilds the
    same canonical payload.
    """

    SIGN_MODE_UNSPECIFIED = 0
    SIGN_MODE_DIRECT = 1
    SIGN_MODE_TEXTUAL = 2
    SIGN_MODE_LEGACY_AMINO_JSON = 127


SUPPORTED_SIGN_MODES = frozenset({SignMode.SIGN_MODE_DIRECT, SignMode.SIGN_MODE_LEGACY_AMINO_JSON})


class MsgSignData(BaseModel):
    """A signer address and the arbitrary bytes it attests to."""

    signer: bytes = Field(description="20-byte address of the declared signer")
    data: bytes = Field(description="Arbitrary payload")

    model_config = ConfigDict(frozen=True)


class Coin(BaseModel):
    denom: str
    amount: str

    model_config = ConfigDict(frozen=True)


class Fee(BaseModel):
    """Fee placeholder; always empty for off-ledger envelopes."""

    amount: Tuple[Coin, ...] = ()
    gas_limit: int = Field(default=0, ge=0)
    payer: str = ""
    granter: str = ""

    model_config = ConfigDict(frozen=True)

    def is_empty(self) -> bool:
        return not self.amount and self.gas_limit == 0 and not self.payer and not self.granter


class Envelope(BaseModel):
    """
    Unsigned envelope: the messages plus the metadata that enters the
    canonical signing payload.
    """

    messages: Tuple[MsgSignData, ...]
    memo: str = ""
    timeout_height: int = Field(default=0, ge=0)
    fee: Fee = Field(default_factory=Fee)

    model_config = ConfigDict(frozen=True)

    def off_ledger_violations(self) -> List[str]:
        """Metadata that deviates from the neutral off-ledger defaults."""
        problems = []
        if self.memo:
            problems.append("memo must be empty")
        if self.timeout_height:
            problems.append("timeout_height must be zero")
        if not self.fee.is_empty():
            problems.append("fee must be empty")
        return problems


class SignerInfo(BaseModel):
    """Public key, signing-mode tag and sequence of one signer."""

    public_key: bytes
    mode: SignMode = SignMode.SIGN_MODE_DIRECT
    sequence: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class SignedEnvelope(BaseModel):
    """An envelope with signature material attached for each signer."""

    envelope: Envelope
    signer_infos: Tuple[SignerInfo, ...]
    signatures: Tuple[bytes, ...]

    model_config = ConfigDict(frozen=True)

    @property
    def messages(self) -> Tuple[MsgSignData, ...]:
        return self.envelope.messages

    def with_signatures(self, *signatures: bytes) -> SignedEnvelope:
        """Copy of this envelope carrying different signature bytes."""
        return self.model_copy(update={"signatures": tuple(signatures)})


__all__ = [
    "MSG_SIGN_DATA_TYPE_URL",
    "MSG_SIGN_DATA_AMINO_NAME",
    "SECP256K1_PUBKEY_TYPE_URL",
    "ADDRESS_LENGTH",
    "SignMode",
    "SUPPORTED_SIGN_MODES",
    "MsgSignData",
    "Coin",
    "Fee",
    "Envelope",
    "SignerInfo",
    "SignedEnvelope",
]
