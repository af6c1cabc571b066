"""
Core utility functions
"""
import paramiko
from pathlib import Path
from typing import Dict, Any, Union

from .constants import SSH_CONFIG_PATH
from .exceptions import ConfigError


# ============================================================
# SSH Config Management
# ============================================================

def load_ssh_config(hostname: str) -> Dict[str, Any]:
    """
    Load configuration for specified Host from ~/.ssh/config.

    Args:
        hostname: Host name in SSH configuration

    Returns:
        Dictionary containing host, user, port, key

    Raises:
        ConfigError: If ~/.ssh/config doesn't exist
    """
    config_path = Path(SSH_CONFIG_PATH).expanduser()
    if not config_path.exists():
        raise ConfigError(f"{SSH_CONFIG_PATH} does not exist")

    ssh_config = paramiko.SSHConfig.from_path(str(config_path))
    entry = ssh_config.lookup(hostname)

    return {
        "host": entry.get("hostname", hostname),
        "user": entry.get("user", None),
        "port": int(entry.get("port", 22)),
        "key": entry.get("identityfile", [None])[0],
    }


# ============================================================
# Permission Parsing
# ============================================================

def parse_mode(value: Union[str, int, None]) -> int:
    """
    Parse permission bits from config or CLI input.

    Strings are read as octal ("0644", "644", "0o644"). Integers are read the
    way chmod reads them: their decimal digits are octal digits, so a TOML
    ``mode = 644`` means 0o644. TOML octal literals (``0o644``) arrive as
    plain integers and cannot be told apart, so write modes as strings or
    bare digits. ``None`` and "" mean "unset" and yield 0.

    Raises:
        ConfigError: If the value is not a valid mode
    """
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ConfigError(f"Invalid file mode: {value!r}")
    text = str(value).strip().lower()
    if text.startswith("0o"):
        text = text[2:]
    try:
        mode = int(text, 8)
    except ValueError as e:
        raise ConfigError(f"Invalid file mode: {value!r}") from e
    if mode < 0 or mode > 0o7777:
        raise ConfigError(f"File mode out of range: {value!r}")
    return mode


def format_mode(mode: int) -> str:
    """Format permission bits as 4-digit octal (e.g. 0644)"""
    return f"{mode:04o}"
