"""
Project constants definitions
"""

# ============================================================
# Remote Temporary Files
# ============================================================

TMP_DIR = "/tmp"
TOOL_PREFIX = "filecast"

# ============================================================
# Log Line Tags
# ============================================================

FILE_TAG = "[FILE   ]"
COMMAND_TAG = "[COMMAND]"

# ============================================================
# Default Values
# ============================================================

DEFAULT_SSH_PORT = 22
DEFAULT_SSH_TIMEOUT = 10
DEFAULT_SEND_OWNER = "root"
DEFAULT_SEND_PERMISSIONS = 0o644

# Chunk size used when hashing or piping local files
STREAM_CHUNK_SIZE = 64 * 1024

# ============================================================
# Configuration
# ============================================================

ENV_PREFIX = "FILECAST_"
SSH_CONFIG_PATH = "~/.ssh/config"
