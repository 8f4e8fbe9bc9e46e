"""
FastAPI Application

Application factory for the signing service.

Usage:
    uvicorn offchain_signer.api.app:create_app --factory --port 8080

    # Or through the CLI
    offchain-signer serve
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..codec.envelope_codec import EnvelopeCodec
from ..config import ServerConfig
from ..signers import Signer, Verifier
from .routes import health, sign, verify

logger = logging.getLogger(__name__)


def create_app(config: Optional[ServerConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The codec, signer and verifier are built once from ``config`` and shared by
    every request through ``app.state``.
    """
    config = config or ServerConfig()

    app = FastAPI(
        title="Off-chain Signer",
        description="""
Sign arbitrary data inside an off-chain Cosmos-style envelope and verify it.

## Endpoints

- **POST /sign** - Sign data with a secp256k1 private key
- **POST /verify** - Verify a signed envelope (JSON or protobuf)
- **GET /health** - Health check
        """,
        version=__version__,
    )

    codec = EnvelopeCodec(config.signing)
    app.state.config = config
    app.state.codec = codec
    app.state.signer = Signer(config.signing, codec)
    app.state.verifier = Verifier(config.signing, codec)

    app.include_router(health.router)
    app.include_router(sign.router)
    app.include_router(verify.router)

    logger.debug(
        f"Application created: chain_id={config.signing.chain_id!r} "
        f"sign_mode={config.signing.sign_mode.name}"
    )
    return app
