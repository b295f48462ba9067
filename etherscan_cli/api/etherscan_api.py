"""
etherscan_api.py

This module is responsible for interacting with the Etherscan API. It exposes one method
per supported query (gas oracle, ETH price, account balance), each of which performs a
single GET request and returns a typed result.

Failures are raised as EtherscanAPIError subclasses (transport, decode, empty result) so
the caller can tell them apart; nothing is retried and nothing is swallowed.
"""

from typing import Optional

import requests

from etherscan_cli.api.exceptions import DecodeError, EmptyResultError, TransportError
from etherscan_cli.api.models import BalanceInfo, GasInfo, PriceInfo, decode_envelope
from etherscan_cli.api.routes import (
    BalanceRoute,
    GasRoute,
    PriceRoute,
    Route,
    TokenBalanceRoute,
    result_type,
    route_params,
)
from etherscan_cli.api.url_builder import URLBuilder
from etherscan_cli.utils.logger import get_logger
from etherscan_cli.utils.redact import redact_api_key

# Initialize logger
logger = get_logger(__name__)

DEFAULT_PROTOCOL = "https"
DEFAULT_HOST = "api.etherscan.io"
DEFAULT_PATH = "/api"
DEFAULT_TIMEOUT = 10


class EtherscanAPI:
    """
    EtherscanAPI handles communication with the Etherscan API.

    The API key and connection settings are fixed at construction; the instance holds no
    per-request state and can be shared between threads.
    """

    def __init__(self, api_key: str, protocol: str = DEFAULT_PROTOCOL, host: str = DEFAULT_HOST,
                 port: int = 0, path: str = DEFAULT_PATH, timeout: float = DEFAULT_TIMEOUT):
        """
        Initializes the EtherscanAPI class with the API key and connection settings.

        :param api_key: API key for accessing the Etherscan API.
        :param protocol: URL scheme, 'https' by default.
        :param host: API host name.
        :param port: API port, 0 to use the scheme's default.
        :param path: Path of the API endpoint on the host.
        :param timeout: Timeout of each request in seconds.
        :raises ValueError: If the API key is missing or the timeout is not positive.
        """
        if not isinstance(api_key, str) or len(api_key) == 0:
            raise ValueError("API key must be a non-empty string")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        self._api_key = api_key
        self.protocol = protocol
        self.host = host
        self.port = port
        self.path = path
        self.timeout = timeout

        logger.debug(f"EtherscanAPI initialized for {protocol}://{host}")

    @property
    def api_key(self) -> str:
        return self._api_key

    def build_url(self, route: Route) -> str:
        """
        Builds the request URL for a route, API key included.

        :param route: The route to request.
        :return: The full request URL.
        """
        builder = (URLBuilder()
                   .set_protocol(self.protocol)
                   .set_host(self.host)
                   .set_port(self.port)
                   .set_path(self.path))

        for key, value in route_params(route).items():
            builder.add_param(key, value)
        builder.add_param("apikey", self._api_key)

        return builder.build()

    def _request(self, route: Route):
        url = self.build_url(route)
        logger.info(f"Requesting route '{route.name}' from {self.host}")

        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as err:
            logger.error(f"HTTP request for route '{route.name}' failed: {redact_api_key(str(err))}")
            raise TransportError(route.name, err) from err

        try:
            return decode_envelope(response.content, result_type(route), route.name)
        except DecodeError as err:
            logger.error(f"Unexpected response for route '{route.name}': {err.reason}")
            raise
        except EmptyResultError as err:
            logger.warning(f"No result for route '{route.name}': {err}")
            raise

    def get_gas(self) -> GasInfo:
        """
        Fetches the current gas oracle data.

        :return: Gas prices and the block they are based on.
        :raises TransportError: If the request fails.
        :raises DecodeError: If the response cannot be decoded.
        :raises EmptyResultError: If the API returns no result.
        """
        return self._request(GasRoute())

    def get_eth_price(self) -> PriceInfo:
        """
        Fetches the ETH spot price in USD and BTC.

        :return: The ETH price.
        :raises TransportError: If the request fails.
        :raises DecodeError: If the response cannot be decoded.
        :raises EmptyResultError: If the API returns no result.
        """
        return self._request(PriceRoute())

    def get_balance(self, address: str, token_address: Optional[str] = None) -> BalanceInfo:
        """
        Fetches the balance of an account, either in ETH or in an ERC-20 token.

        :param address: The Ethereum address of the account.
        :param token_address: Contract address of the token, None for the native balance.
        :return: The raw balance in wei or in the token's smallest unit.
        :raises ValueError: If an address is malformed.
        :raises TransportError: If the request fails.
        :raises DecodeError: If the response cannot be decoded.
        :raises EmptyResultError: If the API returns no result.
        """
        if token_address is None:
            route = BalanceRoute(address)
        else:
            route = TokenBalanceRoute(address, token_address)
        return self._request(route)
