"""
Utilities Module

This module provides utility functions including configuration management,
logging, Sentry integration and unit formatting.
"""

from etherscan_cli.utils.config import get_config
from etherscan_cli.utils.logger import get_logger
from etherscan_cli.utils.sentry import init_sentry, report_api_error, close_sentry
from etherscan_cli.utils.redact import redact_api_key
from etherscan_cli.utils.units import format_units

__all__ = [
    'get_config',
    'get_logger',
    'init_sentry',
    'report_api_error',
    'redact_api_key',
    'close_sentry',
    'format_units',
]
