"""Bounded request body reading."""

from fastapi import Request
from starlette.requests import ClientDisconnect

from ..runtime.errors import IOReadError


async def read_body(request: Request, limit: int) -> bytes:
    """
    Read the whole request body, refusing more than ``limit`` bytes.

    Raises:
        IOReadError: If the client disconnects or the body exceeds ``limit``
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise IOReadError("request body too large", details={"limit": limit})

    chunks = []
    size = 0
    try:
        async for chunk in request.stream():
            size += len(chunk)
            if size > limit:
                raise IOReadError("request body too large", details={"limit": limit})
            chunks.append(chunk)
    except ClientDisconnect as e:
        raise IOReadError("client disconnected while sending the body", cause=e)
    return b"".join(chunks)
