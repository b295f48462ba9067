"""
etherscan-cli

A command-line client for the Etherscan API: gas oracle, ETH price and account balances.
"""

__version__ = "0.1.0"
