"""
Service client tests against a mocked requests session.
"""

import base64
from unittest.mock import MagicMock

import pytest

from offchain_signer.client import ClientConfig, OffchainSignerClient, SignerServiceError
from offchain_signer.runtime.errors import InvalidKeyFormatError, InvalidSignatureError


def _response(status_code=200, content=b"", headers=None, json_body=None):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode("utf-8", "replace")
    response.headers = headers or {}
    response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    return session


class TestOffchainSignerClient:

    def test_config_from_string(self, session):
        client = OffchainSignerClient("http://signer:8080/", session=session)
        assert client.config.endpoint == "http://signer:8080/"
        assert client._url("/sign") == "http://signer:8080/sign"
        assert session.headers["User-Agent"].startswith("offchain-signer-python/")

    def test_default_config(self, session):
        assert OffchainSignerClient(session=session).config == ClientConfig()

    def test_sign_request(self, session):
        session.post.return_value = _response(content=b'{"body":{}}')
        client = OffchainSignerClient("http://signer", session=session)
        assert client.sign(b"\x01" * 32, "hello") == b'{"body":{}}'

        args, kwargs = session.post.call_args
        assert args[0] == "http://signer/sign"
        assert kwargs["json"] == {"private_key": base64.b64encode(b"\x01" * 32).decode(), "data": "hello"}
        assert kwargs["headers"] == {"Accept": "application/json"}

    def test_sign_binary(self, session):
        session.post.return_value = _response(content=b"\x0a\x00")
        OffchainSignerClient("http://signer", session=session).sign(b"\x01" * 32, "hello", binary=True)
        assert session.post.call_args[1]["headers"] == {"Accept": "application/protobuf"}

    def test_verify(self, session):
        session.post.return_value = _response(content=b"valid data:hello")
        client = OffchainSignerClient("http://signer", session=session)
        assert client.verify(b"envelope", "application/protobuf") == b"hello"
        kwargs = session.post.call_args[1]
        assert kwargs["data"] == b"envelope"
        assert kwargs["headers"] == {"Content-Type": "application/protobuf"}

    def test_structured_error(self, session):
        session.post.return_value = _response(
            status_code=400,
            headers={"content-type": "application/json"},
            json_body={"codespace": "offchain", "code": 8, "kind": "INVALID_SIGNATURE", "message": "bad"},
        )
        with pytest.raises(InvalidSignatureError, match="bad"):
            OffchainSignerClient("http://signer", session=session).verify(b"x")

    def test_structured_error_with_details(self, session):
        session.post.return_value = _response(
            status_code=400,
            headers={"content-type": "application/json"},
            json_body={"codespace": "offchain", "code": 2, "message": "bad key", "details": {"length": 31}},
        )
        with pytest.raises(InvalidKeyFormatError) as exc_info:
            OffchainSignerClient("http://signer", session=session).sign(b"\x01" * 31, "hello")
        assert exc_info.value.details == {"length": 31}

    def test_plain_error(self, session):
        session.post.return_value = _response(
            status_code=400,
            content=b"invalid JSON body",
            headers={"content-type": "text/plain; charset=utf-8"},
        )
        with pytest.raises(SignerServiceError, match="invalid JSON body") as exc_info:
            OffchainSignerClient("http://signer", session=session).sign(b"\x01" * 32, "hello")
        assert exc_info.value.status_code == 400

    def test_unexpected_verify_body(self, session):
        session.post.return_value = _response(content=b"something else")
        with pytest.raises(SignerServiceError):
            OffchainSignerClient("http://signer", session=session).verify(b"x")

    def test_health(self, session):
        session.get.return_value = _response(json_body={"ok": True})
        assert OffchainSignerClient("http://signer", session=session).health() == {"ok": True}

    def test_context_manager_closes_session(self, session):
        with OffchainSignerClient("http://signer", session=session):
            pass
        session.close.assert_called_once()
