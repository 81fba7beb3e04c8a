"""
Logging configuration for the two front ends.

When the API is served on its own (``uvicorn ...main:app``) log lines
go to the console as usual.  When ``run.py`` drives the interactive
console in the same process, the terminal belongs to the menu prompts,
so ``setup_logging(console=False)`` sends everything, including
uvicorn's own loggers, to a log file instead.

Handlers installed here are tagged, which keeps repeated calls (tests,
several ``create_app`` calls) from stacking duplicates while leaving
handlers installed by others, such as pytest's capture handler, alone.
"""

import logging
from pathlib import Path
from typing import Optional

DEFAULT_LOGFILE = "lending_registry.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# uvicorn configures these itself unless it is started with log_config=None.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_MARKER = "_lending_registry_handler"


def _installed(logger: logging.Logger) -> bool:
    return any(getattr(handler, _MARKER, False) for handler in logger.handlers)


def _add(logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    setattr(handler, _MARKER, True)
    logger.addHandler(handler)


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    console: bool = True,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Configure the root logger (or ``logger``) once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.
    logfile : Optional[str]
        Path of a log file.  With ``console=False`` it defaults to
        ``DEFAULT_LOGFILE`` so log lines are never lost.
    console : bool
        Attach a stream handler.  Pass ``False`` while an interactive
        console owns the terminal.
    logger : Optional[logging.Logger]
        Logger to configure; the root logger by default.
    """
    target = logger or logging.getLogger()
    if _installed(target):
        return

    target.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if console:
        _add(target, logging.StreamHandler(), formatter)
    else:
        logfile = logfile or DEFAULT_LOGFILE
        # Route uvicorn's records through this logger instead of its own stderr handlers.
        for name in UVICORN_LOGGERS:
            uvicorn_logger = logging.getLogger(name)
            uvicorn_logger.handlers.clear()
            uvicorn_logger.propagate = True

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        _add(target, file_handler, formatter)
