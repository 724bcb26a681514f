"""Logging setup for the command line client.

The library itself only writes to loguru; `configure_logging` decides where
that output goes when `mcsm` runs as a program.
"""

from __future__ import annotations

import logging
import os

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

LOG_FILTER_ENV = "MCSM_LOG_FILTER"

ModuleFilter = dict[str | None, str | int | bool]

_configured = False


class InterceptHandler(logging.Handler):
    """Forward stdlib records (websockets, asyncio) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # point loguru at the caller, not at the logging module
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def parse_log_filter(value: str | None = None) -> tuple[str, ModuleFilter]:
    """Parse a log filter such as "info,mcsm.rpc=debug,websockets=false".

    The first bare entry is the global level. `module=level` entries set a
    per-module level; `module=false` silences the module. Reads
    MCSM_LOG_FILTER when `value` is None.
    """
    raw = value if value is not None else os.getenv(LOG_FILTER_ENV, "info")
    global_level = "info"
    modules: ModuleFilter = {}

    for entry in raw.lower().split(","):
        entry = entry.strip()
        if not entry:
            continue
        module, sep, level = entry.partition("=")
        if not sep:
            global_level = entry
            continue
        level = level.strip()
        modules[module.strip()] = False if level == "false" else level.upper()

    return global_level, modules


def configure_logging() -> None:
    """Route loguru output to stderr through rich. Only the first call has an effect."""
    global _configured
    if _configured:
        return

    level, module_filter = parse_log_filter()
    logger.remove()
    logger.add(
        RichHandler(console=Console(stderr=True), show_time=False, show_path=False, markup=False),
        level=level.upper(),
        format="{message}",
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    _configured = True


__all__ = ["LOG_FILTER_ENV", "InterceptHandler", "configure_logging", "parse_log_filter"]
