"""
Tests for valuerender_core.config — TOML configuration and environment overrides.

Covers:
  - Default values for all dataclass sections
  - TOML parsing and section merging
  - The [denoms] display-unit registry
  - Environment variable overrides (precedence over TOML)
  - _merge helper edge cases
  - Missing TOML files
"""

from __future__ import annotations

import os
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from valuerender_core.coin import DisplayUnit
from valuerender_core.config import (
    DenomsConfig,
    LoggingConfig,
    RenderConfig,
    _merge,
    load_config,
)
from valuerender_core.exceptions import (
    ConfigError,
    InvalidDisplayUnitError,
    UnknownDenominationError,
)


def _write_toml(content: str) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(textwrap.dedent(content))
    return f.name


# ═══════════════════════════════════════════════════════════════════
#  Defaults
# ═══════════════════════════════════════════════════════════════════

class TestDefaults(unittest.TestCase):

    def test_logging_defaults(self):
        log_cfg = LoggingConfig()
        self.assertEqual(log_cfg.level, "INFO")
        self.assertEqual(log_cfg.format, "human")
        self.assertIsNone(log_cfg.file)

    def test_denoms_defaults(self):
        d = DenomsConfig()
        self.assertEqual(d.units, {})
        self.assertEqual(d.display_units(), {})

    def test_render_config_defaults(self):
        cfg = RenderConfig()
        self.assertIsInstance(cfg.logging, LoggingConfig)
        self.assertIsInstance(cfg.denoms, DenomsConfig)


# ═══════════════════════════════════════════════════════════════════
#  _merge helper
# ═══════════════════════════════════════════════════════════════════

class TestMerge(unittest.TestCase):

    def test_merge_updates_fields(self):
        log_cfg = LoggingConfig()
        _merge(log_cfg, {"level": "DEBUG", "format": "json"})
        self.assertEqual(log_cfg.level, "DEBUG")
        self.assertEqual(log_cfg.format, "json")

    def test_merge_ignores_unknown_keys(self):
        log_cfg = LoggingConfig()
        _merge(log_cfg, {"unknown_field": 42})
        self.assertFalse(hasattr(log_cfg, "unknown_field"))

    def test_merge_empty_dict(self):
        log_cfg = LoggingConfig()
        _merge(log_cfg, {})
        self.assertEqual(log_cfg.level, "INFO")  # unchanged


# ═══════════════════════════════════════════════════════════════════
#  TOML loading
# ═══════════════════════════════════════════════════════════════════

class TestLoadConfig(unittest.TestCase):

    def test_load_no_file(self):
        """load_config(None) returns defaults."""
        cfg = load_config(None)
        self.assertEqual(cfg.denoms.units, {})

    def test_load_missing_file(self):
        """Non-existent TOML file returns defaults (no crash)."""
        cfg = load_config("/tmp/__nonexistent_valuerender__.toml")
        self.assertEqual(cfg.logging.format, "human")

    def test_load_toml_file(self):
        path = _write_toml("""\
            [logging]
            level = "DEBUG"
            format = "json"
            file = "logs/render.log"

            [denoms.ucosm]
            display = "COSM"
            exponent = 6

            [denoms.ustake]
            display = "STAKE"
            exponent = 6

            [denoms."ibc/ABC"]
            display = "ATOM"
            exponent = 6
        """)
        try:
            cfg = load_config(path)
        finally:
            os.unlink(path)

        self.assertEqual(cfg.logging.level, "DEBUG")
        self.assertEqual(cfg.logging.format, "json")
        self.assertEqual(cfg.logging.file, "logs/render.log")
        self.assertEqual(
            cfg.denoms.display_units(),
            {
                "ucosm": DisplayUnit("COSM", 6),
                "ustake": DisplayUnit("STAKE", 6),
                "ibc/ABC": DisplayUnit("ATOM", 6),
            },
        )

    def test_syntax_error_raises_config_error(self):
        path = _write_toml("""\
            [logging
            level = [
        """)
        try:
            with self.assertRaises(ConfigError) as ctx:
                load_config(path)
        finally:
            os.unlink(path)
        self.assertIn("cannot load config", str(ctx.exception))

    def test_exponent_defaults_to_zero(self):
        path = _write_toml("""\
            [denoms.ustake]
            display = "ustake"
        """)
        try:
            cfg = load_config(path)
        finally:
            os.unlink(path)
        self.assertEqual(cfg.denoms.display_units()["ustake"], DisplayUnit("ustake", 0))


# ═══════════════════════════════════════════════════════════════════
#  Display-unit registry validation
# ═══════════════════════════════════════════════════════════════════

class TestDenomsRegistry(unittest.TestCase):

    def test_missing_display(self):
        d = DenomsConfig(units={"ucosm": {"exponent": 6}})
        with self.assertRaises(InvalidDisplayUnitError):
            d.display_units()

    def test_negative_exponent(self):
        d = DenomsConfig(units={"ucosm": {"display": "COSM", "exponent": -6}})
        with self.assertRaises(InvalidDisplayUnitError):
            d.display_units()

    def test_float_exponent(self):
        d = DenomsConfig(units={"ucosm": {"display": "COSM", "exponent": 6.0}})
        with self.assertRaises(InvalidDisplayUnitError):
            d.display_units()

    def test_not_a_table(self):
        d = DenomsConfig(units={"ucosm": "COSM"})
        with self.assertRaises(InvalidDisplayUnitError):
            d.display_units()

    def test_single_lookup_skips_other_entries(self):
        d = DenomsConfig(units={
            "ucosm": {"display": "COSM", "exponent": 6},
            "ubad": {"exponent": -1},
        })
        self.assertEqual(d.display_unit("ucosm"), DisplayUnit("COSM", 6))
        with self.assertRaises(InvalidDisplayUnitError):
            d.display_unit("ubad")

    def test_single_lookup_unknown(self):
        d = DenomsConfig(units={"ucosm": {"display": "COSM", "exponent": 6}})
        with self.assertRaises(UnknownDenominationError) as ctx:
            d.display_unit("UCOSM")
        self.assertEqual(ctx.exception.known, ("ucosm",))


# ═══════════════════════════════════════════════════════════════════
#  Environment variable overrides
# ═══════════════════════════════════════════════════════════════════

class TestEnvOverrides(unittest.TestCase):

    @patch.dict(os.environ, {"VALUERENDER_LOG_LEVEL": "debug"}, clear=False)
    def test_env_log_level(self):
        cfg = load_config(None)
        self.assertEqual(cfg.logging.level, "DEBUG")

    @patch.dict(os.environ, {"VALUERENDER_LOG_FMT": "json"}, clear=False)
    def test_env_log_format(self):
        cfg = load_config(None)
        self.assertEqual(cfg.logging.format, "json")

    @patch.dict(os.environ, {"VALUERENDER_LOG_FILE": "/tmp/render.log"}, clear=False)
    def test_env_log_file(self):
        cfg = load_config(None)
        self.assertEqual(cfg.logging.file, "/tmp/render.log")

    @patch.dict(os.environ, {"VALUERENDER_LOG_LEVEL": "ERROR"}, clear=False)
    def test_env_overrides_toml(self):
        path = _write_toml("""\
            [logging]
            level = "DEBUG"
        """)
        try:
            cfg = load_config(path)
        finally:
            os.unlink(path)
        self.assertEqual(cfg.logging.level, "ERROR")


if __name__ == "__main__":
    unittest.main()
