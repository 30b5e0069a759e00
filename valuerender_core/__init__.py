"""
valuerender - precision-safe display text for on-chain values.

Key features:
- Digit grouping for arbitrarily large integers and decimals
- Base-unit coin amounts rendered in display units without floats
- Multi-coin rendering against a denomination registry
- Canonical base64 for raw bytes
"""

from valuerender_core.coin import Coin, DisplayUnit, coin, coins, parse_coins
from valuerender_core.decimal_string import BigDecimalString
from valuerender_core.exceptions import (
    ConfigError,
    InvalidDisplayUnitError,
    MalformedBytesError,
    MalformedCoinError,
    MalformedNumberError,
    RenderError,
    UnknownDenominationError,
)
from valuerender_core.valuerenderers import (
    format_bytes,
    format_coin,
    format_coins,
    format_decimal,
    format_integer,
)

__version__ = "1.0.0"
__all__ = [
    "BigDecimalString",
    "Coin",
    "DisplayUnit",
    "coin",
    "coins",
    "parse_coins",
    "format_integer",
    "format_decimal",
    "format_coin",
    "format_coins",
    "format_bytes",
    "RenderError",
    "ConfigError",
    "MalformedNumberError",
    "MalformedCoinError",
    "MalformedBytesError",
    "InvalidDisplayUnitError",
    "UnknownDenominationError",
]
