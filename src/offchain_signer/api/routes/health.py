"""
Health Check Route

Liveness probe for the signing service.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from ... import __version__


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    ok: bool
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Returns service status for liveness probes."""
    return HealthResponse(ok=True, service="offchain-signer", version=__version__)
