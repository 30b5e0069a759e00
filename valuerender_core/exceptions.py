"""
Exception types for valuerender_core.

Every failure raised by the renderer derives from ``RenderError`` so
callers can catch the whole family at once.  All of them are
deterministic: the same input fails the same way on every call.
"""

from __future__ import annotations

__all__ = [
    "RenderError",
    "MalformedNumberError",
    "MalformedCoinError",
    "MalformedBytesError",
    "InvalidDisplayUnitError",
    "UnknownDenominationError",
    "ConfigError",
]


class RenderError(ValueError):
    """Base class for all renderer failures."""
    pass


# ints beyond this many bits cannot be repr()'d under the default digit cap
_MAX_REPR_BITS = 10_000


def _describe(value) -> str:
    if isinstance(value, int) and value.bit_length() > _MAX_REPR_BITS:
        sign = "-" if value < 0 else ""
        return f"<{sign}int of {value.bit_length()} bits>"
    return repr(value)


class MalformedNumberError(RenderError):
    """Raised when a value does not match the canonical digit grammar.

    Attributes
    ----------
    value : object
        The offending input, as received.
    """

    def __init__(self, value, reason: str = "not a canonical non-negative number"):
        super().__init__(f"{_describe(value)}: {reason}")
        self.value = value
        self.reason = reason


class MalformedCoinError(RenderError):
    """Raised when a coin string like ``"1ucosm"`` cannot be parsed."""

    def __init__(self, value, reason: str = "expected <amount><denom>"):
        super().__init__(f"{value!r}: {reason}")
        self.value = value
        self.reason = reason


class MalformedBytesError(RenderError):
    """Raised when input cannot be viewed as a byte sequence."""
    pass


class InvalidDisplayUnitError(RenderError):
    """Raised when a display unit has an empty denom or a bad exponent."""
    pass


class UnknownDenominationError(RenderError):
    """Raised when a coin's denom has no display unit in the lookup.

    Attributes
    ----------
    denom : str
        The base denomination that could not be resolved.
    known : tuple[str, ...]
        Denominations that the lookup did contain, sorted, for context.
    """

    def __init__(self, denom: str, known=()):
        self.denom = denom
        self.known = tuple(sorted(known))
        hint = ", ".join(self.known) if self.known else "none"
        super().__init__(f"No display unit for denom {denom!r} (known: {hint})")


class ConfigError(RenderError):
    """Raised when a config file cannot be read or parsed."""
    pass
