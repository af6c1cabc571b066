"""
Core infrastructure layer
"""
from .client import RemoteClient, ClientConfig
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import Executor, ConnectionFactory
from .utils import load_ssh_config, parse_mode, format_mode

__all__ = [
    "RemoteClient",
    "ClientConfig",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "Executor",
    "ConnectionFactory",
    "load_ssh_config",
    "parse_mode",
    "format_mode",
]
