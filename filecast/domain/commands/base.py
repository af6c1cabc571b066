"""
Command interfaces
"""
from abc import ABC, abstractmethod
from typing import Any, BinaryIO


class Command(ABC):
    """
    A unit of remote work expressed as shell text.

    Lifecycle: render(context), validate(), then query shell() and logging()
    as often as needed. Neither query mutates the command. render() always
    starts from the text given at construction, so rendering again (e.g.
    planning a package twice) yields the same result.
    """

    @abstractmethod
    def render(self, context: Any) -> None:
        """Expand template placeholders from the construction-time text"""
        pass

    @abstractmethod
    def validate(self) -> None:
        """Raise a CommandError if the command cannot be used"""
        pass

    @abstractmethod
    def shell(self) -> str:
        """Return the shell text to execute on the target"""
        pass

    @abstractmethod
    def logging(self) -> str:
        """Return a one-line human readable summary"""
        pass


class StreamCommand(Command):
    """Command whose shell text consumes a byte stream on stdin"""

    @abstractmethod
    def open_source(self) -> BinaryIO:
        """Open a fresh stream to pipe into the command; the caller closes it"""
        pass
