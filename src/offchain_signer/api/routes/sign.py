"""
Sign Route

POST /sign builds an envelope attesting to the request data, signs it with
the supplied private key and returns the signed envelope.

Request body::

    {"private_key": "<base64>" | [<byte>, ...], "data": "<string>"}

The response is JSON unless the client asks for ``application/protobuf`` in
its Accept header.
"""

import base64
import binascii
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ...codec.envelope_codec import JSON_CONTENT_TYPE, PROTOBUF_CONTENT_TYPE, EnvelopeCodec, media_type
from ...crypto.secp256k1 import derive_identity
from ...runtime.errors import ErrorResult, UnsupportedContentTypeError
from ...signers.signer import Signer
from ..body import read_body
from ..errors import error_result, reject

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sign"])

_JSON_ACCEPT = ("*/*", "application/*", JSON_CONTENT_TYPE)


class SignRequest(BaseModel):
    """Body of a sign request. The key is used once and never stored."""

    private_key: bytes
    data: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("private_key", mode="before")
    @classmethod
    def decode_private_key(cls, v: Any) -> bytes:
        """Accept standard base64 text or an array of byte values."""
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except binascii.Error:
                raise ValueError("private_key is not valid base64")
        if isinstance(v, list):
            if not all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in v):
                raise ValueError("private_key array must hold integers in [0, 255]")
            return bytes(v)
        raise ValueError("private_key must be a base64 string or an array of bytes")

    @field_validator("data")
    @classmethod
    def replace_lone_surrogates(cls, v: str) -> str:
        """JSON may escape unpaired surrogates; they become U+FFFD."""
        return v.encode("utf-16", "surrogatepass").decode("utf-16", "replace")

    def __repr__(self) -> str:
        return f"SignRequest(data={self.data!r})"


def negotiate_response_type(accept: Optional[str]) -> str:
    """
    Pick the response encoding from an Accept header.

    Raises:
        UnsupportedContentTypeError: If no acceptable encoding is offered
    """
    if not accept or not accept.strip():
        return JSON_CONTENT_TYPE
    for part in accept.split(","):
        kind = media_type(part)
        if kind in _JSON_ACCEPT:
            return JSON_CONTENT_TYPE
        if kind == PROTOBUF_CONTENT_TYPE:
            return PROTOBUF_CONTENT_TYPE
    raise UnsupportedContentTypeError(
        f"unsupported accept type: {accept}",
        details={"supported": [JSON_CONTENT_TYPE, PROTOBUF_CONTENT_TYPE]},
    )


def describe_validation_error(e: ValidationError) -> str:
    problems = []
    for err in e.errors():
        loc = ".".join(str(part) for part in err["loc"])
        problems.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "invalid sign request: " + "; ".join(problems)


def sign_payload(signer: Signer, codec: EnvelopeCodec, sign_request: SignRequest, response_type: str) -> bytes:
    """Derive the identity, sign the data and encode the result."""
    identity = derive_identity(sign_request.private_key)
    signed = signer.sign_data(identity, sign_request.data)
    return codec.encoder_for(response_type)(signed)


@router.post("/sign")
async def sign(request: Request) -> Response:
    """Sign arbitrary data and return the signed envelope."""
    state = request.app.state
    try:
        response_type = negotiate_response_type(request.headers.get("accept"))
        body = await read_body(request, state.config.max_body_bytes)
    except Exception as e:
        return reject(request, error_result(e))

    try:
        doc = json.loads(body)
    except (ValueError, RecursionError) as e:
        return reject(request, ErrorResult.plain(f"invalid JSON body: {e}"))
    try:
        sign_request = SignRequest.model_validate(doc)
    except ValidationError as e:
        return reject(request, ErrorResult.plain(describe_validation_error(e)))

    try:
        payload = await run_in_threadpool(sign_payload, state.signer, state.codec, sign_request, response_type)
    except Exception as e:
        return reject(request, error_result(e))

    logger.debug(f"Signed {len(sign_request.data)} characters, responding with {response_type}")
    return Response(content=payload, media_type=response_type)
