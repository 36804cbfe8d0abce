# Slimargs CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Process helpers for the `slimargs` command.

Functions:
- get_program_invocation: Program name for usage and error lines of unnamed parsers.
- running_in_container: Whether PID 1 lives in a container cgroup.
- setup_logging: Route the `slimargs` logger to stderr as rich or JSON records.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from slimargs.console import error_console
from slimargs.logger import logger

CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def get_program_invocation() -> str:
    script = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if script is None:
        return "slimargs"
    if script.name == "__main__.py":
        return f"python -m {script.parent.name}"
    return script.name


def running_in_container() -> bool:
    try:
        cgroup = Path("/proc/1/cgroup").read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in cgroup for marker in CONTAINER_MARKERS)


def setup_logging(mode: str | None = None, level: int = logging.WARNING) -> None:
    """
    Attach a single stderr handler to the `slimargs` logger.

    `mode` is `"cli"` (rich) or `"json"`. When omitted it comes from
    `SLIMARGS_LOG_MODE`, then defaults to `"json"` inside a container and
    `"cli"` elsewhere. Records do not propagate to the root logger.

    Raises:
        ValueError: If `mode` is neither `"cli"` nor `"json"`.
    """
    mode = mode or os.getenv("SLIMARGS_LOG_MODE")
    if not mode:
        mode = "json" if running_in_container() else "cli"

    handler: logging.Handler
    if mode == "cli":
        handler = RichHandler(
            console=error_console,
            show_path=False,
            markup=False,
            log_time_format="[%X]",
        )
    elif mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter(JSON_FORMAT))
    else:
        raise ValueError(f"Invalid log mode: {mode!r}")

    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    logger.debug("Logging to stderr in '%s' mode", mode)
