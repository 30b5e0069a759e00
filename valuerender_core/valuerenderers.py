"""
Value renderers: on-chain numbers, coins and bytes to display text.

The output format is fixed and must stay byte-for-byte stable for the
displays that consume it:

  - ``'``   groups integer digits in threes from the right
  - ``.``   separates the fractional part, which is never grouped
  - ``" "`` sits between an amount and its display denom
  - ``", "`` joins the coins of a collection

Examples:
    format_integer("1234567")                               -> "1'234'567"
    format_decimal("1234.5678")                             -> "1'234.5678"
    format_coin(Coin("1", "ucosm"), DisplayUnit("COSM", 6)) -> "0.000001 COSM"
    format_bytes(b"foo")                                    -> "Zm9v"

Every function is a pure transform; none of them caches anything.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterable, Mapping

from valuerender_core.coin import Coin, DisplayUnit
from valuerender_core.decimal_string import BigDecimalString, split_decimal, validate_integer
from valuerender_core.exceptions import MalformedBytesError, UnknownDenominationError

logger = logging.getLogger(__name__)

GROUP_SEPARATOR = "'"
DECIMAL_POINT = "."
DENOM_SEPARATOR = " "
COINS_SEPARATOR = ", "

__all__ = [
    "GROUP_SEPARATOR",
    "DECIMAL_POINT",
    "DENOM_SEPARATOR",
    "COINS_SEPARATOR",
    "format_integer",
    "format_decimal",
    "format_coin",
    "format_coins",
    "format_bytes",
]


def format_integer(digits: str) -> str:
    """Group the digits of a non-negative integer string in triads."""
    validate_integer(digits)
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return GROUP_SEPARATOR.join(groups)


def format_decimal(value: str) -> str:
    """Group the integer part of a decimal string; keep the fraction verbatim."""
    whole, fractional = split_decimal(value)
    if fractional:
        return f"{format_integer(whole)}{DECIMAL_POINT}{fractional}"
    return format_integer(whole)


def format_coin(coin: Coin, unit: DisplayUnit) -> str:
    """Render *coin* in *unit*, with exactly ``unit.exponent`` fractional digits."""
    amount = BigDecimalString.from_atomics(coin.amount, unit.exponent)
    return f"{format_decimal(str(amount))}{DENOM_SEPARATOR}{unit.denom}"


def format_coins(coins: Iterable[Coin], units: Mapping[str, DisplayUnit]) -> str:
    """Render coins in the given order, joined by ``", "``.

    Raises ``UnknownDenominationError`` when any coin's denom is missing
    from *units*; nothing is rendered in that case.
    """
    rendered: list[str] = []
    for c in coins:
        unit = units.get(c.denom)
        if unit is None:
            logger.debug("no display unit for %r", c.denom)
            raise UnknownDenominationError(c.denom, units.keys())
        rendered.append(format_coin(c, unit))
    return COINS_SEPARATOR.join(rendered)


def format_bytes(data: bytes | bytearray | memoryview | Iterable[int]) -> str:
    """Standard base64 with ``=`` padding and no line breaks."""
    # bytes("x") and bytes(5) would not mean the caller's data
    if isinstance(data, (str, int)):
        raise MalformedBytesError(f"expected bytes, got {type(data).__name__}")
    try:
        raw = bytes(data)
    except (TypeError, ValueError) as exc:
        raise MalformedBytesError(f"cannot render {type(data).__name__} as bytes: {exc}") from exc
    return base64.b64encode(raw).decode("ascii")
