"""Command-line interface for the PPF oracle."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
import time

import uvicorn

from .address import to_checksum_address
from .auth import OperatorSigner
from .config import AppConfig, load_config
from .feed import pair_identity
from .fixed_point import format_rate, parse_rate
from .logging_setup import configure_logging
from .models import RateUpdate
from .oracles import RemoteFeedClient
from .server import create_app
from .services import PriceFeedOracle


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="ppf-oracle",
        description="Operator-signed price feed oracle",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Run the oracle HTTP API")
    sub.add_parser("address", help="Print the configured signer's address")

    for name, help_text in (
        ("sign", "Sign a rate update with the configured key"),
        ("push", "Sign a rate update and submit it to the server"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("base", help="Base asset address")
        p.add_argument("quote", help="Quote asset address")
        p.add_argument("rate", help="Decimal rate, e.g. 2.5")
        p.add_argument(
            "--timestamp",
            type=int,
            default=None,
            help="Observation time in unix seconds (default: now)",
        )

    get_parser = sub.add_parser("get", help="Query a rate from the server")
    get_parser.add_argument("base")
    get_parser.add_argument("quote")

    pair_parser = sub.add_parser("pair-id", help="Print the identity of a pair")
    pair_parser.add_argument("base")
    pair_parser.add_argument("quote")

    return parser


def _signer(config: AppConfig) -> OperatorSigner:
    if not config.signer.private_key:
        raise SystemExit("signer.private_key is not configured")
    return OperatorSigner.from_hex(config.signer.private_key)


def _rate_update(args: argparse.Namespace) -> RateUpdate:
    timestamp = args.timestamp if args.timestamp is not None else int(time.time())
    return RateUpdate(
        base=args.base,
        quote=args.quote,
        rate=format_rate(args.rate),
        timestamp=timestamp,
    )


async def _serve(config: AppConfig) -> None:
    oracle = PriceFeedOracle(config.oracle.operator, config.oracle.operator_owner)
    server = uvicorn.Server(
        uvicorn.Config(
            create_app(oracle),
            host=config.server.host,
            port=config.server.port,
            log_config=None,
        )
    )
    await server.serve()


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)

    if args.command == "pair-id":
        print("0x" + pair_identity(args.base, args.quote).hex())
        return

    config = load_config(args.config)

    if args.command == "serve":
        await _serve(config)
    elif args.command == "address":
        print(to_checksum_address(_signer(config).address))
    elif args.command == "sign":
        update = _rate_update(args)
        signature = _signer(config).sign_update(update)
        print(
            json.dumps(
                {
                    "base": update.base,
                    "quote": update.quote,
                    "rate": str(update.rate),
                    "timestamp": update.timestamp,
                    "signature": "0x" + signature.hex(),
                }
            )
        )
    elif args.command == "push":
        update = _rate_update(args)
        signature = _signer(config).sign_update(update)
        await RemoteFeedClient(config.server).push_update(update, signature)
    elif args.command == "get":
        rate, timestamp = await RemoteFeedClient(config.server).fetch_rate(
            args.base, args.quote
        )
        print(f"{parse_rate(rate)} @ {timestamp}")
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))
