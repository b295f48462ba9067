"""
exceptions.py

Error types raised by the Etherscan API client. Each failure kind has its own class so
callers can tell a network problem from a malformed response or a provider-side error.
"""

from typing import Optional

from etherscan_cli.utils.redact import redact_api_key


class EtherscanAPIError(Exception):
    """Base class for all errors raised while querying the API."""

    def __init__(self, route: str, message: str):
        super().__init__(message)
        self.route = route


class TransportError(EtherscanAPIError):
    """
    The request did not complete: connection, DNS, timeout or HTTP error status.

    The message has the API key masked; the original exception is kept in `error`.
    """

    def __init__(self, route: str, error: Exception):
        super().__init__(route, f"Request for route '{route}' failed: {redact_api_key(str(error))}")
        self.error = error


class DecodeError(EtherscanAPIError):
    """The response body is not JSON or does not match the route's expected schema."""

    def __init__(self, route: str, reason: str):
        super().__init__(route, f"Could not decode response for route '{route}': {reason}")
        self.reason = reason


class EmptyResultError(EtherscanAPIError):
    """
    The response envelope is well formed but carries no result.

    This is how the provider reports its own failures (invalid API key, rate limit, ...).

    Attributes:
        status (str): The envelope's status field.
        provider_message (str): The envelope's message field.
        detail (Optional[str]): Error text the provider put in the result field, if any.
    """

    def __init__(self, route: str, status: str, provider_message: str,
                 detail: Optional[str] = None):
        text = f"Empty result for route '{route}' (status={status}, message={provider_message})"
        if detail:
            text += f": {detail}"
        super().__init__(route, text)
        self.status = status
        self.provider_message = provider_message
        self.detail = detail
