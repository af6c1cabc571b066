"""
Packages: ordered, named groups of commands
"""
from typing import List, Tuple, TYPE_CHECKING

from ..commands.base import Command

if TYPE_CHECKING:
    from .templates import Template


class Package:
    """
    Ordered collection of named command groups.

    Templates add their commands under a group name; nested templates get
    dotted names ("web.nginx").
    """

    def __init__(self) -> None:
        self._groups: List[Tuple[str, List[Command]]] = []

    def add_commands(self, name: str, *commands: Command) -> None:
        """Append a named group of commands"""
        if not name:
            raise ValueError("command group name must not be empty")
        self._groups.append((name, list(commands)))

    def add_template(self, name: str, template: "Template") -> None:
        """Expand template into a child package whose groups are prefixed with name"""
        child = Package()
        template.render(child)
        for group_name, commands in child.groups:
            self._groups.append((f"{name}.{group_name}", commands))

    @property
    def groups(self) -> List[Tuple[str, List[Command]]]:
        return list(self._groups)

    def commands(self) -> List[Tuple[str, Command]]:
        """Flatten groups into (group_name, command) pairs, in order"""
        return [(name, cmd) for name, commands in self._groups for cmd in commands]

    def __len__(self) -> int:
        return sum(len(commands) for _, commands in self._groups)
