"""
Logging setup for the valuerender command line and embedding applications.

Library modules log rejected inputs at DEBUG only.  The CLI attaches
render context to its records through ``extra=``:

    logger.debug("render failed", extra={"command": "coin", "input": "1ucosm"})

Both output formats carry that context:
  - **human** – ``12:00:01 DEBUG   valuerender: render failed [command=coin input='1ucosm']``
  - **json**  – one object per line with ``command`` / ``input`` keys

Usage:
    from valuerender_core.logging_config import configure_logging
    configure_logging(load_config("valuerender.toml").logging)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from valuerender_core.config import LoggingConfig

# Record attributes, set via ``extra=``, that describe what was being rendered.
CONTEXT_FIELDS = ("command", "input", "denom")

_LEVEL_COLOURS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
_RESET = "\033[0m"


def _context(record: logging.LogRecord) -> dict:
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class _JSONFormatter(logging.Formatter):
    """One JSON object per record, render context included."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **_context(record),
        }
        if record.exc_info and record.exc_info[1]:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


class _HumanFormatter(logging.Formatter):
    """Single line; the level is coloured when writing to a terminal."""

    def __init__(self, colour: bool = True):
        super().__init__()
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level = f"{record.levelname:<7}"
        if self.colour:
            level = f"{_LEVEL_COLOURS.get(record.levelno, '')}{level}{_RESET}"
        line = f"{ts} {level} {record.name}: {record.getMessage()}"
        ctx = _context(record)
        if ctx:
            line += " [" + " ".join(f"{k}={v!r}" if k == "input" else f"{k}={v}"
                                   for k, v in ctx.items()) + "]"
        return line


def _reset_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def setup_logging(
    level: str = "INFO",
    fmt: str = "human",
    log_file: Optional[str] = None,
) -> None:
    """
    Configure the root logger, replacing (and closing) previous handlers.

    Parameters
    ----------
    level : str
        Level name; unknown names fall back to INFO.
    fmt : str
        ``"human"`` or ``"json"`` for the stderr handler.
    log_file : str, optional
        Also append JSON lines to this file, creating parent directories.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _reset_handlers(root)

    console = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        console.setFormatter(_JSONFormatter())
    else:
        console.setFormatter(_HumanFormatter(colour=sys.stderr.isatty()))
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path))
        fh.setFormatter(_JSONFormatter())
        root.addHandler(fh)


def configure_logging(
    cfg: LoggingConfig,
    level: Optional[str] = None,
    fmt: Optional[str] = None,
) -> None:
    """Apply a ``[logging]`` config section; *level* / *fmt* override it."""
    setup_logging(level=level or cfg.level, fmt=fmt or cfg.format, log_file=cfg.file)
