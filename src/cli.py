"""Command-line token checks.

Usage:
    python -m src.cli check eth 0xabc...
    python -m src.cli check bsc 0xabc... --json
    python -m src.cli batch eth:0xabc... bsc:0xdef... --offline
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from loguru import logger

from config.settings import settings
from src.parsers.goplus.client import GoPlusClient
from src.risk.models import TokenCheck
from src.services.checker import BatchCheckError, StaticAttributeSource, TokenChecker
from src.utils.logger import setup_logger


def parse_token_ref(value: str) -> tuple[str, str]:
    """'chain:address' → (address, chain)."""
    chain, sep, address = value.partition(":")
    if not sep or not chain or not address:
        raise argparse.ArgumentTypeError(f"expected chain:address, got {value!r}")
    return address, chain


def print_report(result: TokenCheck) -> None:
    print("=" * 65)
    print(f"  {result.chain}:{result.address}")
    print("=" * 65)
    print(f"  Risk score:  {result.risk_score}/100 ({result.risk_level.value})")
    print(f"  Honeypot:    {'YES' if result.is_honeypot else 'no'}")
    print(f"  Rug pull:    {'YES' if result.is_rug_pull else 'no'}")
    if result.risks:
        print("\n  Findings:")
        for risk in result.risks:
            print(f"    [{risk.severity.value:>8s}] {risk.type}: {risk.description}")
    else:
        print("\n  No risks detected")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Token security check (GoPlus + heuristic score)")
    parser.add_argument("--offline", action="store_true", help="Skip GoPlus; every token reads clean")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a report")
    parser.add_argument("--log-level", default="WARNING")

    sub = parser.add_subparsers(dest="command", required=True)

    single = sub.add_parser("check", help="Check one token")
    single.add_argument("chain")
    single.add_argument("address")

    batch = sub.add_parser("batch", help="Check several tokens")
    batch.add_argument("tokens", nargs="+", type=parse_token_ref, metavar="CHAIN:ADDRESS")
    return parser


async def run(args: argparse.Namespace) -> int:
    client: GoPlusClient | None = None
    if args.offline:
        source = StaticAttributeSource()
    else:
        client = GoPlusClient(
            base_url=settings.goplus_base_url,
            api_key=settings.goplus_api_key,
            timeout=settings.goplus_timeout_sec,
            max_rps=settings.goplus_max_rps,
        )
        source = client

    checker = TokenChecker(source, concurrency=settings.batch_concurrency)
    try:
        if args.command == "check":
            results = [await checker.check(args.chain, args.address)]
        else:
            results = await checker.check_many(args.tokens)
    except BatchCheckError as e:
        logger.error(f"Check failed: {e}")
        return 1
    finally:
        if client is not None:
            await client.close()

    if args.json:
        payload = [r.to_dict() for r in results]
        print(json.dumps(payload[0] if args.command == "check" else payload, indent=2))
    else:
        for result in results:
            print_report(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
