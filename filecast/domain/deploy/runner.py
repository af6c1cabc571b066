"""
Command execution
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from ...core.exceptions import ExecutionError
from ...core.interfaces import Executor
from ...core.logging import get_logger
from ..commands.base import Command, StreamCommand
from .package import Package

logger = get_logger(__name__)


@dataclass
class PlannedCommand:
    """A rendered, validated command ready to run"""
    group: str
    command: Command
    log_line: str
    shell: str


# ============================================================
# Preparation
# ============================================================

def prepare(command: Command, context: Any) -> None:
    """Render then validate a command; raises on the first problem"""
    command.render(context)
    command.validate()


def plan(package: Package, context: Any) -> List[PlannedCommand]:
    """
    Render and validate every command of the package, then synthesize.

    All commands are validated before any shell text is built, so a broken
    command anywhere in the package stops the deploy before encoding or
    hashing work starts.
    """
    pairs: List[Tuple[str, Command]] = package.commands()
    for _, cmd in pairs:
        prepare(cmd, context)

    return [
        PlannedCommand(group=group, command=cmd, log_line=cmd.logging(), shell=cmd.shell())
        for group, cmd in pairs
    ]


# ============================================================
# Execution
# ============================================================

def execute(executor: Executor, planned: PlannedCommand) -> Tuple[str, str, int]:
    """
    Run one planned command.

    Stream commands get a freshly opened source piped to stdin; the stream is
    closed once the command has finished.

    Raises:
        ExecutionError: If the remote command exits non-zero
    """
    logger.info(planned.log_line)
    logger.debug(f"[run] {planned.shell}")

    cmd = planned.command
    if isinstance(cmd, StreamCommand):
        with cmd.open_source() as stream:
            out, err, code = executor.exec_with_code(planned.shell, stdin=stream)
    else:
        out, err, code = executor.exec_with_code(planned.shell)

    if code != 0:
        raise ExecutionError(
            f"Command failed in group {planned.group!r}:\n{planned.log_line}\ncode: {code}\nstderr:\n{err}",
            exit_code=code,
            stderr=err,
        )
    return out, err, code


class DeployRunner:
    """Runs a package's commands, in order, through one executor"""

    def __init__(
        self,
        executor: Executor,
        on_command: Optional[Callable[[PlannedCommand], None]] = None,
    ):
        """
        Args:
            executor: Connected executor (RemoteClient)
            on_command: Optional callback receiving each PlannedCommand before it runs
        """
        self.executor = executor
        self.on_command = on_command

    def run(self, package: Package, context: Any) -> List[PlannedCommand]:
        """Plan the package, then run every command"""
        return self.run_planned(plan(package, context))

    def run_planned(self, planned: List[PlannedCommand]) -> List[PlannedCommand]:
        """Run already planned commands, stopping at the first failure"""
        for item in planned:
            if self.on_command:
                self.on_command(item)
            execute(self.executor, item)
        return planned
