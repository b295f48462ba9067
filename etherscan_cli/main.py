"""
main.py

This is the entry point of the `etherscan` command. It parses the command line, resolves
the API key (from --api-key or the environment), runs one query through EtherscanAPI and
prints the result.

Exit codes: 0 on success, 1 when the API call fails, 2 on usage errors.
"""

import argparse
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from etherscan_cli import __version__
from etherscan_cli.api.etherscan_api import EtherscanAPI
from etherscan_cli.api.exceptions import EtherscanAPIError
from etherscan_cli.utils.config import get_config, reset_config
from etherscan_cli.utils.logger import get_logger
from etherscan_cli.utils.redact import redact_api_key
from etherscan_cli.utils.sentry import close_sentry, init_sentry, report_api_error
from etherscan_cli.utils.units import ETHER_DECIMALS, format_units

# Initialize logger
logger = get_logger(__name__)

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_USAGE = 2

# A uint256 has at most 78 digits.
MAX_DECIMALS = 78


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="etherscan", description="A CLI to interact with Etherscan")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--api-key", help="Etherscan API key (default: $ETHERSCAN_API_KEY)")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    subparsers.add_parser("gas", help="Show the current gas oracle prices")
    subparsers.add_parser("price", help="Show the ETH price in USD and BTC")

    balance = subparsers.add_parser("balance", help="Show the balance of an account")
    balance.add_argument("address", help="Account address (0x...)")
    balance.add_argument("--token", metavar="CONTRACT", help="Token contract address")
    balance.add_argument("--decimals", type=int,
                         help=f"Decimals used to format the balance (default: {ETHER_DECIMALS} "
                              "for ETH, raw for tokens)")
    balance.add_argument("--raw", action="store_true", help="Print the unformatted integer amount")

    return parser


def print_gas(api: EtherscanAPI) -> None:
    gas = api.get_gas()
    print("Gas info:")
    print(f"Safe Gas Price: {gas.safe_gas_price} gwei")
    print(f"Propose Gas Price: {gas.propose_gas_price} gwei")
    print(f"Fast Gas Price: {gas.fast_gas_price} gwei")
    print(f"Suggested Base Fee: {gas.suggested_base_fee} gwei")
    print(f"Last Block: {gas.last_block}")


def print_price(api: EtherscanAPI) -> None:
    price = api.get_eth_price()
    print(f"ETH/USD: {price.eth_usd_price}")
    print(f"ETH/BTC: {price.eth_btc_price}")


def print_balance(api: EtherscanAPI, args: argparse.Namespace) -> None:
    balance = api.get_balance(args.address, args.token)

    decimals = args.decimals
    if decimals is None and args.token is None:
        decimals = ETHER_DECIMALS

    if args.raw or decimals is None:
        print(balance.value)
    elif args.token is None:
        print(f"{format_units(balance.value, decimals)} ETH")
    else:
        print(format_units(balance.value, decimals))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs the CLI.

    :param argv: Command line arguments without the program name, sys.argv[1:] if None.
    :return: The process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    decimals = getattr(args, "decimals", None)
    if decimals is not None and not 0 <= decimals <= MAX_DECIMALS:
        parser.error(f"--decimals must be between 0 and {MAX_DECIMALS}")

    # Variables already set in the environment win over the .env file.
    load_dotenv(find_dotenv(usecwd=True), override=False)
    reset_config()
    config = get_config()
    api_key = args.api_key or config.API_KEY
    if not api_key:
        parser.error("an API key is required: pass --api-key or set ETHERSCAN_API_KEY")

    init_sentry()
    try:
        api = EtherscanAPI(api_key=api_key, protocol=config.PROTOCOL, host=config.HOST,
                           port=config.PORT, path=config.PATH, timeout=config.REQUEST_TIMEOUT)

        if args.command == "gas":
            print_gas(api)
        elif args.command == "price":
            print_price(api)
        else:
            print_balance(api, args)

    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except EtherscanAPIError as e:
        logger.debug(f"Command '{args.command}' failed: {redact_api_key(str(e))}")
        report_api_error(e, args.command)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_API_ERROR
    finally:
        close_sentry()

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
