"""
Inline file write command
"""
import base64
import gzip
import hashlib
import posixpath
import shlex
from typing import Any

from ...core.constants import FILE_TAG, TMP_DIR, TOOL_PREFIX
from ...core.exceptions import ValidationError
from ...core.utils import format_mode
from ...rendering import render
from .base import Command
from .models import FileSpec


# ============================================================
# Encoding Helpers
# ============================================================

def encode_content(content: str) -> str:
    """gzip the UTF-8 content and return it base64 encoded"""
    compressed = gzip.compress(content.encode("utf-8"))
    return base64.b64encode(compressed).decode("ascii")


def content_digest(content: str) -> str:
    """SHA-256 hex digest of the uncompressed content"""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def temp_path_for(content: str) -> str:
    """
    Remote staging path derived from the content digest.

    Identical content always maps to the same path; distinct content maps to
    distinct paths unless SHA-256 collides.
    """
    return f"{TMP_DIR}/{TOOL_PREFIX}.{content_digest(content)}"


# ============================================================
# Command
# ============================================================

class WriteFileCommand(Command):
    """
    Write inline content to a remote file.

    The content travels gzip-compressed and base64 encoded inside the command
    text. It is decoded into a temporary file named after its SHA-256 digest;
    chown/chmod are applied to that temporary file, and a final ``mv`` puts it
    in place. Every step is ``&&``-chained, so the target path is either left
    untouched or replaced in one rename.
    """

    def __init__(self, spec: FileSpec):
        self.spec = spec
        self._template = (spec.path, spec.content)

    def render(self, context: Any) -> None:
        path, content = self._template
        self.spec.path = render(path, context)
        self.spec.content = render(content, context)

    def validate(self) -> None:
        if self.spec.path == "":
            raise ValidationError("no path given")

        if self.spec.content == "":
            raise ValidationError(f"no content given for file {self.spec.path!r}")

    def shell(self) -> str:
        spec = self.spec
        encoded = encode_content(spec.content)
        tmp_path = shlex.quote(temp_path_for(spec.content))
        target = shlex.quote(spec.path)
        directory = shlex.quote(posixpath.dirname(spec.path) or ".")

        steps = [
            f"mkdir -p {directory}",
            f"echo {encoded} | base64 -d | gunzip > {tmp_path}",
        ]
        if spec.owner != "":
            steps.append(f"chown {shlex.quote(spec.owner)} {tmp_path}")
        if spec.permissions != 0:
            steps.append(f"chmod {format_mode(spec.permissions)} {tmp_path}")
        # Only operation touching the target path
        steps.append(f"mv {tmp_path} {target}")
        return " && ".join(steps)

    def logging(self) -> str:
        parts = [FILE_TAG]

        if self.spec.owner not in ("", "root"):
            parts.append(f"[CHOWN:{self.spec.owner}]")

        if self.spec.permissions != 0:
            parts.append(f"[CHMOD:{format_mode(self.spec.permissions)}]")

        parts.append(f" {self.spec.path}")
        return "".join(parts)


def write_file(path: str, content: str, owner: str = "", permissions: int = 0) -> WriteFileCommand:
    """
    Create a command writing content to path.

    owner and permissions are optional; their empty defaults leave the remote
    system's ownership and mode untouched.
    """
    return WriteFileCommand(FileSpec(path=path, content=content, owner=owner, permissions=permissions))
