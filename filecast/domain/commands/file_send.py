"""
Local file send command
"""
import hashlib
import os
import shlex
from typing import Any, BinaryIO

from ...core.constants import (
    DEFAULT_SEND_OWNER,
    DEFAULT_SEND_PERMISSIONS,
    FILE_TAG,
    STREAM_CHUNK_SIZE,
)
from ...core.exceptions import SourceFileError, ValidationError
from ...core.logging import get_logger
from ...core.utils import format_mode
from ...rendering import render
from .base import StreamCommand
from .models import TransferSpec

logger = get_logger(__name__)


def source_digest(path: str) -> str:
    """
    SHA-1 hex digest of a local file, streamed in chunks.

    Raises:
        SourceFileError: If the file cannot be opened or read
    """
    digest = hashlib.sha1()
    try:
        with open(path, "rb") as fh:
            for chunk in iter(lambda: fh.read(STREAM_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise SourceFileError(f"Failed to hash source file {path!r}: {e}") from e
    return digest.hexdigest()


class SendFileCommand(StreamCommand):
    """
    Copy a local file to the remote host through the command's stdin.

    The transport pipes ``open_source()`` into the command. Unlike
    WriteFileCommand, ``cat - > target`` writes the target path directly with
    no staging file, so an interrupted transfer can leave a partial target.
    """

    def __init__(self, spec: TransferSpec):
        self.spec = spec
        self._template = (spec.source, spec.target)

    def render(self, context: Any) -> None:
        source, target = self._template
        self.spec.source = render(source, context)
        self.spec.target = render(target, context)

    def validate(self) -> None:
        if self.spec.source == "":
            raise ValidationError("no source path given")

        try:
            os.stat(self.spec.source)
        except OSError as e:
            raise SourceFileError(f"Cannot access source file {self.spec.source!r}: {e}") from e

        if self.spec.target == "":
            raise ValidationError(f"no target path given for file {self.spec.source!r}")

    def shell(self) -> str:
        spec = self.spec
        target = shlex.quote(spec.target)

        steps = [
            # Informational marker of the bytes being sent
            f"echo {source_digest(spec.source)}",
            f"cat - > {target}",
        ]
        if spec.owner not in ("", "root"):
            steps.append(f"chown {shlex.quote(spec.owner)} {target}")
        steps.append(f"chmod {format_mode(spec.permissions)} {target}")
        return " && ".join(steps)

    def open_source(self) -> BinaryIO:
        """
        Open the local source file for reading.

        Each call opens a new handle; the caller owns it and must close it.

        Raises:
            SourceFileError: If the file cannot be opened
        """
        logger.debug(f"[open] {self.spec.source}")
        try:
            return open(self.spec.source, "rb")
        except OSError as e:
            raise SourceFileError(f"Failed to open source file {self.spec.source!r}: {e}") from e

    def logging(self) -> str:
        parts = [FILE_TAG]

        if self.spec.owner not in ("", "root"):
            parts.append(f"[CHOWN:{self.spec.owner}]")

        if self.spec.permissions != 0:
            parts.append(f"[CHMOD:{format_mode(self.spec.permissions)}]")

        parts.append(f" Writing local file {self.spec.source} to {self.spec.target}")
        return "".join(parts)


def send_file(
    source: str,
    target: str,
    owner: str = DEFAULT_SEND_OWNER,
    permissions: int = DEFAULT_SEND_PERMISSIONS,
) -> SendFileCommand:
    """Create a command sending the local file source to target"""
    return SendFileCommand(TransferSpec(source=source, target=target, owner=owner, permissions=permissions))
