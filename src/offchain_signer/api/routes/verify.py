"""
Verify Route

POST /verify decodes a signed envelope with the decoder named by the
Content-Type header, verifies it and echoes the attested data as
``valid data:<data>``.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from ..body import read_body
from ..errors import error_result, reject

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verify"])

VALID_PREFIX = b"valid data:"


@router.post("/verify")
async def verify(request: Request) -> Response:
    """Verify a signed envelope in JSON or protobuf form."""
    state = request.app.state
    content_type = request.headers.get("content-type")
    try:
        decode = state.codec.decoder_for(content_type)
        body = await read_body(request, state.config.max_body_bytes)
        signed = await run_in_threadpool(decode, body)
        msg = await run_in_threadpool(state.verifier.verify, signed)
    except Exception as e:
        return reject(request, error_result(e))

    logger.debug(f"Verified {len(msg.data)} bytes from {content_type}")
    return Response(content=VALID_PREFIX + msg.data, media_type="text/plain")
