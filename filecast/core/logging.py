"""
Rich-based logging for filecast
"""
import logging
from typing import Optional
from pathlib import Path

from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install as install_traceback

# Log lines go to stderr so stdout carries only synthesized shell text.
# Consoles resolve sys.stdout / sys.stderr when printing, not at import.
_stdout_console = Console()
_stderr_console = Console(stderr=True)

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    rich_tracebacks: bool = True,
) -> None:
    """Route the root logger to a RichHandler on stderr, plus log_file if given"""
    log_level = getattr(logging, level.upper(), logging.INFO)

    if rich_tracebacks:
        install_traceback(width=120)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # markup off: command lines contain [FILE   ] style tags
    console_handler = RichHandler(
        console=_stderr_console,
        show_path=False,
        markup=False,
        rich_tracebacks=rich_tracebacks,
    )
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Console for command output (synthesized shell, dry-run listings)"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Console for errors and progress"""
    return _stderr_console
