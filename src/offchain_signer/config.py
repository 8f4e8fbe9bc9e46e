"""
Configuration for the off-chain signer.

``SigningConfig`` carries the metadata that enters every canonical signing
payload. It is built once at startup and handed explicitly to the codec,
builder, signer and verifier. ``ServerConfig`` adds the process-level settings
of the HTTP service.
"""

from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tx.types import SUPPORTED_SIGN_MODES, SignMode

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_MAX_BODY_BYTES = 1 << 20


class SigningConfig(BaseModel):
    """
    Off-ledger signing metadata.

    The chain id, account number and sequence are fixed neutral values so the
    canonical payload never depends on ledger state. A signature produced for
    an empty chain id can never be replayed as an on-chain transaction.
    """

    chain_id: str = Field(default="", alias="chainId", description="Chain/context identifier")
    account_number: int = Field(default=0, ge=0, alias="accountNumber")
    sequence: int = Field(default=0, ge=0)
    sign_mode: SignMode = Field(default=SignMode.SIGN_MODE_DIRECT, alias="signMode")
    bech32_prefix: str = Field(default="cosmos", alias="bech32Prefix", min_length=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator('sign_mode', mode='before')
    @classmethod
    def parse_sign_mode(cls, v: Any) -> SignMode:
        """Accept enum members, numbers or names such as ``SIGN_MODE_DIRECT``."""
        if isinstance(v, str):
            try:
                v = SignMode[v.upper()]
            except KeyError:
                raise ValueError(f"Unknown sign mode: {v}")
        mode = SignMode(v)
        if mode not in SUPPORTED_SIGN_MODES:
            raise ValueError(f"Unsupported sign mode: {mode.name}")
        return mode

    @field_validator('bech32_prefix')
    @classmethod
    def check_prefix(cls, v: str) -> str:
        if v != v.lower() or not v.isalnum():
            raise ValueError(f"bech32 prefix must be lowercase alphanumeric: {v!r}")
        return v


class ServerConfig(BaseModel):
    """Settings for the HTTP service."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, ge=1, alias="maxBodyBytes")
    log_level: str = Field(default="INFO", alias="logLevel")
    signing: SigningConfig = Field(default_factory=SigningConfig)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_MAX_BODY_BYTES",
    "SigningConfig",
    "ServerConfig",
]
