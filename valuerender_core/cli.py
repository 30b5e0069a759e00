"""
valuerender command line — render on-chain values from the shell.

Usage:
    valuerender integer 1234567
    valuerender decimal 1234.5678
    valuerender coin 1ucosm --unit COSM:6
    valuerender --config valuerender.toml coins 1ucosm,3ustake
    valuerender bytes --text foo

Environment variables (alternative to flags):
    VALUERENDER_LOG_LEVEL, VALUERENDER_LOG_FMT, VALUERENDER_LOG_FILE
"""

from __future__ import annotations

import argparse
import logging
import sys

from valuerender_core.coin import DisplayUnit, parse_coins
from valuerender_core.config import RenderConfig, load_config
from valuerender_core.exceptions import (
    ConfigError,
    InvalidDisplayUnitError,
    MalformedBytesError,
    MalformedCoinError,
    RenderError,
)
from valuerender_core.logging_config import configure_logging
from valuerender_core.valuerenderers import (
    format_bytes,
    format_coin,
    format_coins,
    format_decimal,
    format_integer,
)

logger = logging.getLogger("valuerender")


def parse_unit(text: str) -> DisplayUnit:
    """Parse ``DENOM:EXPONENT`` (e.g. ``COSM:6``)."""
    denom, sep, exponent = text.rpartition(":")
    if not sep or not exponent.isascii() or not exponent.isdigit():
        raise InvalidDisplayUnitError(f"{text!r}: expected DENOM:EXPONENT")
    return DisplayUnit(denom, int(exponent))


def _single_coin(text: str):
    parsed = parse_coins(text)
    if len(parsed) != 1:
        raise MalformedCoinError(text, "expected exactly one coin")
    return parsed[0]


def _render(args: argparse.Namespace, cfg: RenderConfig) -> str:
    if args.command == "integer":
        return format_integer(args.value)
    if args.command == "decimal":
        return format_decimal(args.value)
    if args.command == "coin":
        c = _single_coin(args.value)
        if args.unit:
            unit = parse_unit(args.unit)
        else:
            unit = cfg.denoms.display_unit(c.denom)
        return format_coin(c, unit)
    if args.command == "coins":
        parsed = parse_coins(args.value)
        # only the denoms being rendered are resolved
        units = {c.denom: cfg.denoms.display_unit(c.denom) for c in parsed}
        return format_coins(parsed, units)
    if args.command == "bytes":
        if args.hex is not None:
            try:
                data = bytes.fromhex(args.hex)
            except ValueError as exc:
                raise MalformedBytesError(f"{args.hex!r}: {exc}") from exc
        else:
            data = args.text.encode("utf-8")
        return format_bytes(data)
    raise AssertionError(f"unhandled command {args.command!r}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="valuerender",
        description="Render on-chain integers, decimals, coins and bytes as display text",
    )
    p.add_argument("--config", default=None, help="Path to valuerender.toml config file")
    p.add_argument("--log-level", default=None,
                   help="DEBUG, INFO, WARNING, ERROR (overrides config)")
    p.add_argument("--log-format", choices=["human", "json"], default=None,
                   help="Log output format (overrides config)")

    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("integer", help="Group the digits of an integer")
    sp.add_argument("value", help="Canonical integer, e.g. 1234567")

    sp = sub.add_parser("decimal", help="Group the integer part of a decimal")
    sp.add_argument("value", help="Canonical decimal, e.g. 1234.5678")

    sp = sub.add_parser("coin", help="Render one coin in its display unit")
    sp.add_argument("value", help="Coin in base units, e.g. 1ucosm")
    sp.add_argument("--unit", default=None,
                    help="Display unit as DENOM:EXPONENT (default: from [denoms] in config)")

    sp = sub.add_parser("coins", help="Render a comma-separated coin list")
    sp.add_argument("value", help="Coins in base units, e.g. 1ucosm,3ustake")

    sp = sub.add_parser("bytes", help="Render bytes as base64")
    group = sp.add_mutually_exclusive_group(required=True)
    group.add_argument("--hex", default=None, help="Input bytes as hex")
    group.add_argument("--text", default=None, help="Input bytes as UTF-8 text")

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    configure_logging(cfg.logging, level=args.log_level, fmt=args.log_format)
    try:
        out = _render(args, cfg)
    except RenderError as exc:
        logger.debug("render failed", exc_info=True,
                     extra={"command": args.command, "input": getattr(args, "value", None)})
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
