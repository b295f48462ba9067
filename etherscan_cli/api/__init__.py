"""
API Module

This module provides the Etherscan API client together with the URL builder,
route definitions, response models and error types it is built from.
"""

from etherscan_cli.api.etherscan_api import EtherscanAPI
from etherscan_cli.api.exceptions import (
    EtherscanAPIError,
    TransportError,
    DecodeError,
    EmptyResultError,
)
from etherscan_cli.api.models import GasInfo, PriceInfo, BalanceInfo, ResponseEnvelope
from etherscan_cli.api.routes import GasRoute, PriceRoute, BalanceRoute, TokenBalanceRoute
from etherscan_cli.api.url_builder import URLBuilder

__all__ = [
    'EtherscanAPI',
    'EtherscanAPIError',
    'TransportError',
    'DecodeError',
    'EmptyResultError',
    'GasInfo',
    'PriceInfo',
    'BalanceInfo',
    'ResponseEnvelope',
    'GasRoute',
    'PriceRoute',
    'BalanceRoute',
    'TokenBalanceRoute',
    'URLBuilder',
]
