"""
TOML-based configuration for valuerender.

Loads settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.

Usage:
    from valuerender_core.config import load_config
    cfg = load_config("valuerender.toml")
    units = cfg.denoms.display_units()

Example file:

    [logging]
    level = "DEBUG"
    format = "json"

    [denoms.ucosm]
    display = "COSM"
    exponent = 6
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from valuerender_core.coin import DisplayUnit
from valuerender_core.exceptions import (
    ConfigError,
    InvalidDisplayUnitError,
    UnknownDenominationError,
)

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[import,no-redef]

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "human"   # "human" or "json"
    file: str | None = None


@dataclass
class DenomsConfig:
    """
    Display-unit registry.

    ``units`` maps a base denom to its raw table, e.g.
    ``{"ucosm": {"display": "COSM", "exponent": 6}}``.  Lookups are
    exact and case-sensitive.
    """
    units: dict[str, dict[str, Any]] = field(default_factory=dict)

    def display_unit(self, base: str) -> DisplayUnit:
        """Resolve one base denom; other entries are not looked at."""
        raw = self.units.get(base)
        if raw is None:
            raise UnknownDenominationError(base, self.units.keys())
        if not isinstance(raw, dict):
            raise InvalidDisplayUnitError(f"[denoms.{base}] must be a table")
        if "display" not in raw:
            raise InvalidDisplayUnitError(f"[denoms.{base}] is missing 'display'")
        return DisplayUnit(raw["display"], raw.get("exponent", 0))

    def display_units(self) -> dict[str, DisplayUnit]:
        """Build the base-denom -> ``DisplayUnit`` map."""
        return {base: self.display_unit(base) for base in self.units}


@dataclass
class RenderConfig:
    """Top-level configuration container."""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    denoms: DenomsConfig = field(default_factory=DenomsConfig)


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def load_config(path: str | None = None) -> RenderConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    Env-var mapping:
        VALUERENDER_LOG_LEVEL -> logging.level
        VALUERENDER_LOG_FMT   -> logging.format
        VALUERENDER_LOG_FILE  -> logging.file
    """
    cfg = RenderConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            try:
                with open(p, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise ConfigError(f"cannot load config {p}: {exc}") from exc
            if "logging" in data:
                _merge(cfg.logging, data["logging"])
            if "denoms" in data:
                cfg.denoms.units = dict(data["denoms"])
            logger.debug("loaded %s (%d denoms)", p, len(cfg.denoms.units))
        else:
            logger.debug("config file %s not found, using defaults", p)

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("VALUERENDER_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("VALUERENDER_LOG_FMT"):
        cfg.logging.format = v
    if v := os.environ.get("VALUERENDER_LOG_FILE"):
        cfg.logging.file = v

    return cfg
