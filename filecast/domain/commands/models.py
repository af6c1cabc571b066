"""
Command domain models
"""
from dataclasses import dataclass

from ...core.constants import DEFAULT_SEND_OWNER, DEFAULT_SEND_PERMISSIONS


@dataclass
class FileSpec:
    """
    Desired state of a file written from inline content.

    Attributes:
        path: Remote path of the file (may contain template placeholders)
        content: File content (may contain template placeholders)
        owner: chown argument; empty leaves ownership unchanged
        permissions: Mode bits; 0 leaves the system default in place
    """
    path: str
    content: str
    owner: str = ""
    permissions: int = 0


@dataclass
class TransferSpec:
    """
    Desired state of a file copied from a local source over stdin.

    Attributes:
        source: Local filesystem path of the file to send
        target: Remote path to write
        owner: chown argument; "root" (the default) skips chown
        permissions: Mode bits, always applied
    """
    source: str
    target: str
    owner: str = DEFAULT_SEND_OWNER
    permissions: int = DEFAULT_SEND_PERMISSIONS
