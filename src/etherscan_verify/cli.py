"""Command-line interface for etherscan-verify.

Usage:
    etherscan-verify verify --contract project/contracts/Bank.sol:Bank --future-id BankModule#Bank \\
        --constructor-types uint256,uint256 --constructor-values '[100000000000000000000, 1000000000000000000]'
    etherscan-verify address --future-id BankModule#Bank
    etherscan-verify preflight

Exit codes: 0 verified, 1 any other failure, 2 timed out.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .artifacts import find_build_info
from .config import load_config, load_environment, preflight_check, resolve_network
from .constants import NETWORK_CONFIG
from .deployments import read_deployed_address
from .encoding import encode_constructor_args
from .exceptions import PollTimeoutError, VerificationError
from .paths import get_build_info_dir
from .workflow import verify_contract

logger = logging.getLogger("etherscan_verify")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_TIMEOUT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etherscan-verify",
        description="Verify deployed contract source on an Etherscan-compatible explorer",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    verify = subparsers.add_parser("verify", help="Submit and poll a verification")
    verify.add_argument(
        "--contract",
        required=True,
        help="Fully-qualified contract name, e.g. project/contracts/Bank.sol:Bank",
    )
    target = verify.add_mutually_exclusive_group(required=True)
    target.add_argument("--address", help="Deployed contract address")
    target.add_argument("--future-id", help="Ignition future id to read the address from")
    verify.add_argument("--build-info", help="Build-info JSON (default: search artifacts/build-info)")
    verify.add_argument("--constructor-args", default="", help="ABI-encoded constructor args (hex)")
    verify.add_argument("--constructor-types", help="Comma-separated ABI types to encode")
    verify.add_argument("--constructor-values", help="JSON array of constructor values")
    verify.add_argument("--max-attempts", type=int, help="Status queries before timing out")
    verify.add_argument("--interval-ms", type=int, help="Delay before each status query")
    verify.add_argument("--api-url", help="Override explorer API endpoint")
    _add_common_arguments(verify)

    address = subparsers.add_parser("address", help="Print a deployed address from Ignition output")
    address.add_argument("--future-id", required=True, help="Ignition future id")
    _add_common_arguments(address)

    preflight = subparsers.add_parser("preflight", help="Check deployment environment variables")
    preflight.add_argument("--env-file", help="Path to .env file")

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--network", choices=sorted(NETWORK_CONFIG), help="Target network")
    parser.add_argument("--env-file", help="Path to .env file")
    parser.add_argument("--project-root", help="Hardhat project root (default: cwd)")


def _constructor_args(args: argparse.Namespace) -> str:
    if args.constructor_types is None and args.constructor_values is None:
        return args.constructor_args

    if args.constructor_args:
        raise ValueError("Use either --constructor-args or --constructor-types/--constructor-values")
    if args.constructor_types is None or args.constructor_values is None:
        raise ValueError("--constructor-types and --constructor-values must be given together")

    types = [t.strip() for t in args.constructor_types.split(",") if t.strip()]
    try:
        values = json.loads(args.constructor_values)
    except json.JSONDecodeError as e:
        raise ValueError(f"--constructor-values is not valid JSON: {e}") from e
    if not isinstance(values, list):
        raise ValueError("--constructor-values must be a JSON array")

    return encode_constructor_args(types, values)


def _run_verify(args: argparse.Namespace) -> int:
    constructor_args = _constructor_args(args)
    config = load_config(network=args.network, env_file=args.env_file)
    overrides = {}
    if args.max_attempts is not None:
        overrides["max_attempts"] = args.max_attempts
    if args.interval_ms is not None:
        overrides["interval_ms"] = args.interval_ms
    if args.api_url:
        overrides["api_url"] = args.api_url
    if overrides:
        config = replace(config, **overrides)

    if args.address:
        contract_address = args.address
    else:
        contract_address = read_deployed_address(
            config.chain_id, args.future_id, args.project_root
        )

    build_info = args.build_info or find_build_info(
        get_build_info_dir(args.project_root), args.contract
    )

    logger.info("Submitting verification to %s...", NETWORK_CONFIG[config.network]["chain_name"])
    job = verify_contract(
        config,
        build_info,
        contract_address,
        args.contract,
        constructor_args,
    )
    print(f"Verified: {job.last_message}")
    explorer_url = NETWORK_CONFIG[config.network]["block_explorer_url"]
    print(f"View on explorer: {explorer_url}/address/{contract_address}#code")
    return EXIT_OK


def _run_address(args: argparse.Namespace) -> int:
    load_environment(args.env_file)
    chain_id = NETWORK_CONFIG[resolve_network(args.network)]["chain_id"]
    sys.stdout.write(read_deployed_address(chain_id, args.future_id, args.project_root))
    return EXIT_OK


def _run_preflight(args: argparse.Namespace) -> int:
    load_environment(args.env_file)
    errors, warnings = preflight_check()
    for warning in warnings:
        logger.warning(warning)
    if errors:
        logger.error("Preflight failed for Sepolia deployment:\n- %s", "\n- ".join(errors))
        return EXIT_FAILURE
    print("[ok] Preflight passed: environment looks good for Sepolia deployment.")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "verify": _run_verify,
        "address": _run_address,
        "preflight": _run_preflight,
    }

    try:
        return handlers[args.command](args)
    except PollTimeoutError as e:
        logger.error("%s", e)
        return EXIT_TIMEOUT
    except (VerificationError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
