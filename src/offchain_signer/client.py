"""
HTTP client for the signing service.

Thin ``requests`` wrapper around ``POST /sign``, ``POST /verify`` and
``GET /health``. Structured 400 responses are raised as the matching
``OffchainError`` subclass; plain-text ones as ``SignerServiceError``.
"""

from __future__ import annotations
import base64
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from . import __version__
from .codec.envelope_codec import JSON_CONTENT_TYPE, PROTOBUF_CONTENT_TYPE
from .runtime.errors import CODESPACE, OffchainError

logger = logging.getLogger(__name__)


@dataclass
class ClientConfig:
    """Configuration for the signing service client."""

    endpoint: str = "http://localhost:8080"
    timeout: float = 30.0
    user_agent: str = f"offchain-signer-python/{__version__}"


class SignerServiceError(Exception):
    """Unstructured failure reported by the service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class OffchainSignerClient:
    """Client for a running signing service."""

    def __init__(self, config: Union[str, ClientConfig, None] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Endpoint URL or a ClientConfig (defaults to localhost:8080)
            session: Session to reuse; one is created if omitted
        """
        if config is None:
            config = ClientConfig()
        elif isinstance(config, str):
            config = ClientConfig(endpoint=config)
        self.config = config
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = config.user_agent

    def _url(self, path: str) -> str:
        return self.config.endpoint.rstrip("/") + path

    def _check(self, response: requests.Response) -> requests.Response:
        if response.status_code == 400:
            body = _structured_body(response)
            if body is not None:
                raise OffchainError.from_dict(body)
            raise SignerServiceError(response.text, response.status_code)
        response.raise_for_status()
        return response

    def sign(self, private_key: bytes, data: str, binary: bool = False) -> bytes:
        """
        Sign ``data`` with ``private_key``.

        Returns:
            The encoded signed envelope (protobuf when ``binary`` is set, else JSON)
        """
        accept = PROTOBUF_CONTENT_TYPE if binary else JSON_CONTENT_TYPE
        payload = {"private_key": base64.b64encode(private_key).decode("ascii"), "data": data}
        logger.debug(f"POST /sign ({len(data)} characters, accept={accept})")
        response = self._session.post(
            self._url("/sign"),
            json=payload,
            headers={"Accept": accept},
            timeout=self.config.timeout,
        )
        return self._check(response).content

    def verify(self, envelope: bytes, content_type: str = JSON_CONTENT_TYPE) -> bytes:
        """
        Verify an encoded signed envelope.

        Returns:
            The attested data
        """
        logger.debug(f"POST /verify ({len(envelope)} bytes, {content_type})")
        response = self._session.post(
            self._url("/verify"),
            data=envelope,
            headers={"Content-Type": content_type},
            timeout=self.config.timeout,
        )
        body = self._check(response).content
        prefix = b"valid data:"
        if not body.startswith(prefix):
            raise SignerServiceError(f"unexpected verify response: {body[:64]!r}", response.status_code)
        return body[len(prefix):]

    def health(self) -> Dict[str, Any]:
        response = self._session.get(self._url("/health"), timeout=self.config.timeout)
        return self._check(response).json()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> OffchainSignerClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def _structured_body(response: requests.Response) -> Optional[Dict[str, Any]]:
    if not response.headers.get("content-type", "").startswith(JSON_CONTENT_TYPE):
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("codespace") == CODESPACE:
        return body
    return None


__all__ = ["ClientConfig", "SignerServiceError", "OffchainSignerClient"]
