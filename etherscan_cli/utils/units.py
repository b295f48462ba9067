"""
units.py

Conversion of raw integer amounts (wei, or the smallest unit of a token) into
human-readable decimal strings. Purely a presentation helper for the CLI.
"""

from decimal import Decimal, InvalidOperation, localcontext

ETHER_DECIMALS = 18


def format_units(value: str, decimals: int) -> str:
    """
    Scales an integer string down by ``10 ** decimals``.

    >>> format_units("1500000000000000000", 18)
    '1.5'

    :param value: Integer amount as a decimal string.
    :param decimals: Number of decimals of the unit, 0 returns the value unchanged.
    :return: The scaled amount without trailing zeros or exponent notation.
    :raises ValueError: If the value is not an integer string or decimals is negative.
    """
    if decimals < 0:
        raise ValueError("decimals must be non-negative")

    try:
        amount = Decimal(value)
    except InvalidOperation as err:
        raise ValueError(f"Not a decimal amount: {value!r}") from err

    if amount != amount.to_integral_value():
        raise ValueError(f"Not an integer amount: {value!r}")

    with localcontext() as ctx:
        ctx.prec = max(len(value) + decimals, 28)
        scaled = amount.scaleb(-decimals)
        text = format(scaled, "f")

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
