"""
Plain shell commands
"""
import shlex
from typing import Any

from ...core.constants import COMMAND_TAG
from ...core.exceptions import ValidationError
from ...rendering import render
from .base import Command


class ShellCommand(Command):
    """Shell text executed as-is after template rendering"""

    def __init__(self, command: str):
        self.command = command
        self._template = command

    def render(self, context: Any) -> None:
        self.command = render(self._template, context)

    def validate(self) -> None:
        if not self.command.strip():
            raise ValidationError("no command given")

    def shell(self) -> str:
        return self.command

    def logging(self) -> str:
        return f"{COMMAND_TAG} {self.command}"


def install_packages(*packages: str) -> ShellCommand:
    """Refresh the apt index and install the given Debian/Ubuntu packages"""
    names = " ".join(shlex.quote(p) for p in packages)
    return ShellCommand(
        f"apt-get update && DEBIAN_FRONTEND=noninteractive apt-get install -y --no-install-recommends {names}"
    )
