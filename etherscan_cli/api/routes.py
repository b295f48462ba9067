"""
routes.py

The closed set of API routes the client knows about. A route names a logical operation
(gas oracle, ETH price, balance, token balance); route_params() maps it to the fixed
module/action pair plus the route's own query parameters, and result_type() to the model
its result is decoded into.
"""

import re
from dataclasses import dataclass
from typing import Dict, Type, Union

from etherscan_cli.api.models import BalanceInfo, GasInfo, PriceInfo

ADDRESS_PATTERN = re.compile(r'^0x[a-fA-F0-9]{40}$')


def normalize_address(address: str) -> str:
    """
    Validates an Ethereum address and returns it in lowercase hex.

    :param address: A 0x-prefixed, 40 hex digit address in any letter case.
    :return: The lowercase address.
    :raises ValueError: If the address is not a 20-byte hex value.
    """
    if not isinstance(address, str) or not ADDRESS_PATTERN.match(address):
        raise ValueError(f"Invalid Ethereum address format: {address}")
    return address.lower()


@dataclass(frozen=True)
class GasRoute:
    name = "gas"


@dataclass(frozen=True)
class PriceRoute:
    name = "price"


@dataclass(frozen=True)
class BalanceRoute:
    """Native balance of an account."""
    address: str

    name = "balance"

    def __post_init__(self):
        object.__setattr__(self, "address", normalize_address(self.address))


@dataclass(frozen=True)
class TokenBalanceRoute:
    """Balance of an account in the token deployed at contract_address."""
    address: str
    contract_address: str

    name = "tokenbalance"

    def __post_init__(self):
        object.__setattr__(self, "address", normalize_address(self.address))
        object.__setattr__(self, "contract_address", normalize_address(self.contract_address))


Route = Union[GasRoute, PriceRoute, BalanceRoute, TokenBalanceRoute]


def route_params(route: Route) -> Dict[str, str]:
    """
    Returns the query parameters for a route, module and action first.

    :raises TypeError: If route is not one of the known route types.
    """
    if isinstance(route, GasRoute):
        return {"module": "gastracker", "action": "gasoracle"}
    if isinstance(route, PriceRoute):
        return {"module": "stats", "action": "ethprice"}
    if isinstance(route, BalanceRoute):
        return {
            "module": "account",
            "action": "balance",
            "address": route.address,
            "tag": "latest",
        }
    if isinstance(route, TokenBalanceRoute):
        return {
            "module": "account",
            "action": "tokenbalance",
            "address": route.address,
            "contractaddress": route.contract_address,
            "tag": "latest",
        }
    raise TypeError(f"Unknown route: {route!r}")


def result_type(route: Route) -> Type:
    """Returns the model a route's result is decoded into."""
    if isinstance(route, GasRoute):
        return GasInfo
    if isinstance(route, PriceRoute):
        return PriceInfo
    if isinstance(route, (BalanceRoute, TokenBalanceRoute)):
        return BalanceInfo
    raise TypeError(f"Unknown route: {route!r}")
