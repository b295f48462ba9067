"""
Pydantic models for Etherscan API responses.

Every response is wrapped in the same envelope ({status, message, result}); the shape of
`result` depends on the route. Numeric values are kept as the decimal strings the API
returns so no precision is lost.
"""

import json
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from etherscan_cli.api.exceptions import DecodeError, EmptyResultError

SUCCESS_STATUS = "1"


def _check_decimal(value: str) -> str:
    try:
        finite = Decimal(value).is_finite()
    except InvalidOperation:
        finite = False
    if not finite:
        raise ValueError(f"not a decimal string: {value!r}")
    return value


class GasInfo(BaseModel):
    """
    Gas oracle data.

    Attributes:
        last_block (str): Number of the block the estimate is based on.
        safe_gas_price (str): Safe gas price in gwei.
        propose_gas_price (str): Proposed gas price in gwei.
        fast_gas_price (str): Fast gas price in gwei.
        suggested_base_fee (str): Suggested base fee of the next block in gwei.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    last_block: str = Field(..., alias="LastBlock")
    safe_gas_price: str = Field(..., alias="SafeGasPrice")
    propose_gas_price: str = Field(..., alias="ProposeGasPrice")
    fast_gas_price: str = Field(..., alias="FastGasPrice")
    suggested_base_fee: str = Field(..., alias="suggestBaseFee")

    @field_validator("*")
    @classmethod
    def validate_decimal(cls, value: str) -> str:
        return _check_decimal(value)


class PriceInfo(BaseModel):
    """
    ETH spot price.

    Attributes:
        eth_usd_price (str): Price of one ETH in USD.
        eth_btc_price (str): Price of one ETH in BTC.
        eth_usd_timestamp (Optional[str]): Unix time of the USD quote.
        eth_btc_timestamp (Optional[str]): Unix time of the BTC quote.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    eth_usd_price: str = Field(..., alias="ethusd")
    eth_btc_price: str = Field(..., alias="ethbtc")
    eth_usd_timestamp: Optional[str] = Field(None, alias="ethusd_timestamp")
    eth_btc_timestamp: Optional[str] = Field(None, alias="ethbtc_timestamp")

    @field_validator("eth_usd_price", "eth_btc_price")
    @classmethod
    def validate_decimal(cls, value: str) -> str:
        return _check_decimal(value)


class BalanceInfo(RootModel[str]):
    """Account balance as an integer string, in wei or in the token's smallest unit."""
    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def validate_integer(cls, value: str) -> str:
        if not (value.isascii() and value.isdigit()):
            raise ValueError(f"not an integer string: {value!r}")
        return value

    @property
    def value(self) -> str:
        return self.root

    def __str__(self) -> str:
        return self.root


ResultT = TypeVar("ResultT")


class ResponseEnvelope(BaseModel, Generic[ResultT]):
    """
    The envelope wrapping every API response.

    Attributes:
        status (str): "1" on success, "0" on failure.
        message (str): Short provider message ("OK", "NOTOK", ...).
        result (Optional[ResultT]): The route specific payload, absent on failure.
    """
    model_config = ConfigDict(frozen=True)

    status: str
    message: str
    result: Optional[ResultT] = None


def _is_provider_error(payload: Any) -> bool:
    # Failed calls come back as {"status": "0", "message": "NOTOK", "result": "<error text>"}
    return (
        isinstance(payload, dict)
        and isinstance(payload.get("status"), str)
        and payload["status"] != SUCCESS_STATUS
        and isinstance(payload.get("result"), str)
    )


def parse_envelope(payload: Any, result_type: Type[ResultT], route: str) -> ResultT:
    """
    Validates an already parsed JSON payload and unwraps its result.

    :param payload: The JSON document, as returned by json.loads().
    :param result_type: Model the result is validated against.
    :param route: Route name used in error messages.
    :return: The validated result.
    :raises EmptyResultError: If the envelope carries no usable result.
    :raises DecodeError: If the payload does not match the envelope or result schema.
    """
    try:
        envelope = ResponseEnvelope[result_type].model_validate(payload)
    except ValidationError as err:
        if _is_provider_error(payload):
            raise EmptyResultError(route, payload["status"], str(payload.get("message", "")),
                                   payload["result"]) from err
        raise DecodeError(route, str(err)) from err

    if envelope.result is None:
        raise EmptyResultError(route, envelope.status, envelope.message)

    return envelope.result


def decode_envelope(body: Union[str, bytes], result_type: Type[ResultT], route: str) -> ResultT:
    """
    Parses a raw response body and unwraps its result, see parse_envelope().

    :raises DecodeError: If the body is not valid JSON.
    """
    try:
        payload = json.loads(body)
    except ValueError as err:
        raise DecodeError(route, f"response body is not valid JSON ({err})") from err

    return parse_envelope(payload, result_type, route)
