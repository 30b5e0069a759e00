"""
Coin and display-unit value types.

A ``Coin`` is an amount in the smallest indivisible unit of its denom
(e.g. ``1 ucosm``).  A ``DisplayUnit`` names the human-facing denom and
the power of ten between the two (``COSM`` = ``ucosm`` / 10^6).

Helpers mirror the shapes chain queries hand back:

    coin(1, "ucosm")              -> Coin(amount="1", denom="ucosm")
    coins(2000, "ucosm")          -> [Coin(amount="2000", denom="ucosm")]
    parse_coins("1ucosm,3ustake") -> [Coin("1", "ucosm"), Coin("3", "ustake")]
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from valuerender_core.decimal_string import INTEGER_RE, int_to_digits
from valuerender_core.exceptions import (
    InvalidDisplayUnitError,
    MalformedCoinError,
    MalformedNumberError,
)

# <amount><denom>, denom starting with a letter, 3-128 chars total
COIN_RE = re.compile(r"([0-9]+)([a-zA-Z][a-zA-Z0-9/:._-]{2,127})")


@dataclass(frozen=True)
class Coin:
    """An amount in base units of ``denom``."""
    amount: str
    denom: str

    def to_dict(self) -> dict:
        return {"amount": self.amount, "denom": self.denom}

    @classmethod
    def from_dict(cls, d: dict) -> Coin:
        return cls(amount=d["amount"], denom=d["denom"])


@dataclass(frozen=True)
class DisplayUnit:
    """Human denomination: ``display = base / 10**exponent``."""
    denom: str
    exponent: int = 0

    def __post_init__(self):
        if not isinstance(self.denom, str) or not self.denom:
            raise InvalidDisplayUnitError(f"denom must be a non-empty string, got {self.denom!r}")
        if isinstance(self.exponent, bool) or not isinstance(self.exponent, int):
            raise InvalidDisplayUnitError(
                f"exponent for {self.denom!r} must be an int, got {self.exponent!r}"
            )
        if self.exponent < 0:
            raise InvalidDisplayUnitError(
                f"exponent for {self.denom!r} must be >= 0, got {self.exponent}"
            )

    def to_dict(self) -> dict:
        return {"denom": self.denom, "exponent": self.exponent}

    @classmethod
    def from_dict(cls, d: dict) -> DisplayUnit:
        return cls(denom=d["denom"], exponent=d.get("exponent", 0))


def coin(amount: int | str, denom: str) -> Coin:
    """Build a ``Coin`` from an int or a canonical digit string."""
    if isinstance(amount, bool):
        raise MalformedNumberError(amount, "amount must be an int or digit string")
    if isinstance(amount, int):
        if amount < 0:
            raise MalformedNumberError(amount, "amount must be non-negative")
        return Coin(int_to_digits(amount), denom)
    if isinstance(amount, str) and INTEGER_RE.fullmatch(amount):
        return Coin(amount, denom)
    raise MalformedNumberError(amount, "amount must be an int or digit string")


def coins(amount: int | str, denom: str) -> list[Coin]:
    """One-element coin list, the shape fee and send amounts take."""
    return [coin(amount, denom)]


def parse_coins(text: str) -> list[Coin]:
    """Parse ``"1ucosm,3ustake"`` into coins, keeping the given order.

    Leading zeros in an amount are dropped (``"007ucosm"`` -> ``7``).
    """
    result: list[Coin] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            if text.strip():
                raise MalformedCoinError(text, "empty item in coin list")
            continue
        match = COIN_RE.fullmatch(part)
        if match is None:
            raise MalformedCoinError(part)
        amount, denom = match.groups()
        result.append(Coin(amount.lstrip("0") or "0", denom))
    return result
