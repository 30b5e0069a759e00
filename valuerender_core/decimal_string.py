"""
Arbitrary-precision decimal strings for valuerender.

On-chain amounts are integers in the smallest indivisible unit of a
denomination, and 18-decimal tokens routinely exceed the 53-bit mantissa
of a ``float``.  Moving the decimal point is therefore done on the digit
string itself:

    BigDecimalString.from_atomics("1", 6)   ->  0.000001
    BigDecimalString.from_atomics("1234567", 3)  ->  1234.567

No value ever passes through ``float`` or a fixed-width integer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal

from valuerender_core.exceptions import MalformedNumberError

logger = logging.getLogger(__name__)

# Canonical unsigned integer: "0" or digits without a leading zero.
INTEGER_RE = re.compile(r"0|[1-9][0-9]*")

# Canonical unsigned decimal: integer part, optional ".<digits>".
DECIMAL_RE = re.compile(r"(0|[1-9][0-9]*)(?:\.([0-9]+))?")

FRACTION_RE = re.compile(r"[0-9]*")

# int -> str conversion is capped by sys.set_int_max_str_digits; convert
# in fixed-width pieces that stay well under the cap.
_CHUNK_DIGITS = 1000
_CHUNK = 10 ** _CHUNK_DIGITS


def int_to_digits(value: int) -> str:
    """Canonical digit string of a non-negative int of any size.

    >>> int_to_digits(10 ** 5000) == "1" + "0" * 5000
    True
    """
    if value < _CHUNK:
        return str(value)
    pieces: list[str] = []
    while value >= _CHUNK:
        value, low = divmod(value, _CHUNK)
        pieces.append(f"{low:0{_CHUNK_DIGITS}d}")
    pieces.append(str(value))
    return "".join(reversed(pieces))


def validate_integer(digits: str) -> str:
    """Return *digits* unchanged, or raise ``MalformedNumberError``.

    >>> validate_integer("1234")
    '1234'
    """
    if not isinstance(digits, str):
        raise MalformedNumberError(digits, "expected a digit string")
    if INTEGER_RE.fullmatch(digits) is None:
        logger.debug("rejected integer %r", digits)
        raise MalformedNumberError(digits, "not a canonical non-negative integer")
    return digits


def split_decimal(value: str) -> tuple[str, str]:
    """Split a canonical decimal string into ``(whole, fractional)``.

    *fractional* is ``""`` when *value* has no decimal point.
    """
    if not isinstance(value, str):
        raise MalformedNumberError(value, "expected a decimal string")
    match = DECIMAL_RE.fullmatch(value)
    if match is None:
        logger.debug("rejected decimal %r", value)
        raise MalformedNumberError(value, "not a canonical non-negative decimal")
    return match.group(1), match.group(2) or ""


def _check_exponent(exponent: int) -> int:
    if isinstance(exponent, bool) or not isinstance(exponent, int) or exponent < 0:
        raise MalformedNumberError(exponent, "exponent must be a non-negative int")
    return exponent


@dataclass(frozen=True)
class BigDecimalString:
    """A non-negative rational held as exact digit strings.

    ``whole`` is a canonical integer string; ``fractional`` holds the
    digits after the point verbatim, including trailing zeros.
    """
    whole: str = "0"
    fractional: str = ""

    def __post_init__(self):
        validate_integer(self.whole)
        if not isinstance(self.fractional, str) or FRACTION_RE.fullmatch(self.fractional) is None:
            raise MalformedNumberError(self.fractional, "fractional part must be ASCII digits")

    # ── constructors ─────────────────────────────────────────────

    @classmethod
    def from_user_input(cls, value: str) -> BigDecimalString:
        """Parse ``"<int>[.<frac>]"``, keeping the fraction verbatim."""
        whole, fractional = split_decimal(value)
        return cls(whole, fractional)

    @classmethod
    def from_atomics(cls, atomics: str, fractional_digits: int) -> BigDecimalString:
        """Return ``atomics / 10**fractional_digits``.

        The result has exactly *fractional_digits* digits after the point.
        """
        return cls(validate_integer(atomics)).scale_down(fractional_digits)

    # ── arithmetic on the digit string ───────────────────────────

    def scale_down(self, exponent: int) -> BigDecimalString:
        """Divide by ``10**exponent`` by moving the point *exponent* places left."""
        _check_exponent(exponent)
        if exponent == 0:
            return self
        if len(self.whole) > exponent:
            whole = self.whole[:-exponent]
            moved = self.whole[-exponent:]
        else:
            whole = "0"
            moved = self.whole.rjust(exponent, "0")
        return BigDecimalString(whole, moved + self.fractional)

    # ── accessors ────────────────────────────────────────────────

    @property
    def fractional_digits(self) -> int:
        return len(self.fractional)

    @property
    def atomics(self) -> str:
        """The digits with the point removed, as a canonical integer string."""
        return (self.whole + self.fractional).lstrip("0") or "0"

    def to_decimal(self) -> Decimal:
        """Exact ``decimal.Decimal`` view, for callers doing arithmetic."""
        return Decimal(str(self))

    def __str__(self) -> str:
        if self.fractional:
            return f"{self.whole}.{self.fractional}"
        return self.whole
