"""
Command line interface.

    offchain-signer serve [--host H] [--port P]
    offchain-signer keygen
    offchain-signer sign --key-hex K --data D [--format json|binary] [--output F]
    offchain-signer verify FILE [--format json|binary]

``sign`` and ``verify`` run locally unless ``--server URL`` is given, in which
case they call a running service.
"""

import argparse
import base64
import json
import logging
import sys
from typing import List, Optional

import requests

from . import __version__
from .client import OffchainSignerClient, SignerServiceError
from .codec.address import to_bech32
from .codec.envelope_codec import JSON_CONTENT_TYPE, PROTOBUF_CONTENT_TYPE, EnvelopeCodec
from .config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_MAX_BODY_BYTES, ServerConfig, SigningConfig
from .crypto.secp256k1 import Secp256k1PrivateKey
from .runtime.errors import OffchainError
from .signers import Signer, Verifier

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_CONTENT_TYPES = {"json": JSON_CONTENT_TYPE, "binary": PROTOBUF_CONTENT_TYPE}


def _signing_config(args: argparse.Namespace) -> SigningConfig:
    return SigningConfig(
        chain_id=args.chain_id,
        sign_mode=args.sign_mode,
        bech32_prefix=args.prefix,
    )


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .api.app import create_app

    config = ServerConfig(
        host=args.host,
        port=args.port,
        max_body_bytes=args.max_body_bytes,
        log_level=args.log_level,
        signing=_signing_config(args),
    )
    logger.debug(f"Server config: {config.to_dict()}")
    logger.info(f"Starting offchain-signer {__version__} on {config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


def cmd_keygen(args: argparse.Namespace) -> int:
    key = Secp256k1PrivateKey.generate()
    print(json.dumps({
        "private_key_hex": key.to_hex(),
        "private_key_base64": base64.b64encode(key.to_bytes()).decode("ascii"),
        "public_key_hex": key.public_key().to_bytes().hex(),
        "address": to_bech32(key.address(), args.prefix),
    }, indent=2))
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    key = Secp256k1PrivateKey.from_hex(args.key_hex)
    if args.server:
        with OffchainSignerClient(args.server) as client:
            encoded = client.sign(key.to_bytes(), args.data, binary=args.format == "binary")
    else:
        config = _signing_config(args)
        codec = EnvelopeCodec(config)
        signed = Signer(config, codec).sign_data(key, args.data)
        encoded = codec.encoder_for(_CONTENT_TYPES[args.format])(signed)

    if args.output:
        with open(args.output, "wb") as f:
            f.write(encoded)
    else:
        sys.stdout.buffer.write(encoded)
        if args.format == "json":
            sys.stdout.buffer.write(b"\n")
        sys.stdout.flush()
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    with open(args.file, "rb") as f:
        encoded = f.read()
    content_type = _CONTENT_TYPES[args.format]
    if args.format == "json":
        encoded = encoded.strip()

    if args.server:
        with OffchainSignerClient(args.server) as client:
            data = client.verify(encoded, content_type)
    else:
        config = _signing_config(args)
        codec = EnvelopeCodec(config)
        data = Verifier(config, codec).verify(codec.decode(encoded, content_type)).data

    sys.stdout.buffer.write(b"valid data:" + data + b"\n")
    sys.stdout.flush()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="offchain-signer", description="Off-chain data signing service")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--chain-id", default="", help="Chain id entering the signing payload")
    parser.add_argument("--sign-mode", default="SIGN_MODE_DIRECT",
                        help="SIGN_MODE_DIRECT or SIGN_MODE_LEGACY_AMINO_JSON")
    parser.add_argument("--prefix", default="cosmos", help="bech32 address prefix")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default=DEFAULT_HOST)
    serve.add_argument("--port", type=int, default=DEFAULT_PORT)
    serve.add_argument("--max-body-bytes", type=int, default=DEFAULT_MAX_BODY_BYTES)
    serve.set_defaults(func=cmd_serve)

    keygen = sub.add_parser("keygen", help="Generate a secp256k1 key")
    keygen.set_defaults(func=cmd_keygen)

    sign = sub.add_parser("sign", help="Sign data")
    sign.add_argument("--key-hex", required=True, help="32-byte private key as hex")
    sign.add_argument("--data", required=True)
    sign.add_argument("--format", choices=sorted(_CONTENT_TYPES), default="json")
    sign.add_argument("--output", help="Write the envelope to a file instead of stdout")
    sign.add_argument("--server", help="Sign through a running service at this URL")
    sign.set_defaults(func=cmd_sign)

    verify = sub.add_parser("verify", help="Verify a signed envelope file")
    verify.add_argument("file")
    verify.add_argument("--format", choices=sorted(_CONTENT_TYPES), default="json")
    verify.add_argument("--server", help="Verify through a running service at this URL")
    verify.set_defaults(func=cmd_verify)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format=LOG_FORMAT)
    try:
        return args.func(args)
    except (OffchainError, SignerServiceError, requests.RequestException) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Pydantic validation errors of the config flags land here too
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
