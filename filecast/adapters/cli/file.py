"""
Single-file CLI commands: print the synthesized shell for one file
"""
import typer
from pathlib import Path
from typing import Optional, Dict, List

from rich.markup import escape

from ...core.logging import get_logger, get_stdout_console, get_stderr_console
from ...core.exceptions import FilecastError, CommandError, ConfigError
from ...core.utils import parse_mode
from ...domain.commands import Command, write_file, send_file
from ...domain.deploy import prepare

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()


def register_file_commands(app: typer.Typer) -> None:
    """Register write/send commands directly on the main app"""
    app.command(name="write")(write_run)
    app.command(name="send")(send_run)


def parse_vars(items: List[str]) -> Dict[str, str]:
    """Parse repeated --var key=value options into a template context"""
    context: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--var")
        context[key] = value
    return context


def _emit(cmd: Command, context: Dict[str, str]) -> None:
    """Render, validate and print one command's shell text"""
    try:
        prepare(cmd, context)
        shell = cmd.shell()
    except CommandError as e:
        stderr_console.print(f"[red]Command Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except FilecastError as e:
        stderr_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    logger.info(cmd.logging())
    stdout_console.print(shell, markup=False, emoji=False, highlight=False, soft_wrap=True)


def write_run(
    path: str = typer.Argument(..., help="Remote path of the file to write"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="Inline file content"),
    from_file: Optional[Path] = typer.Option(
        None, "--from", "-f", help="Read the content from a local file"
    ),
    owner: str = typer.Option("", "--owner", "-o", help="chown argument (unchanged if empty)"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Octal permissions, e.g. 0644"),
    var: List[str] = typer.Option([], "--var", help="Template variable key=value (repeatable)"),
):
    """
    Print the command that writes inline content to a remote file

    Examples:
        filecast write /etc/motd --content 'hello {{ name }}' --var name=web1
        filecast write /etc/app.conf --from app.conf --owner app --mode 0640
    """
    if (content is None) == (from_file is None):
        stderr_console.print("[red]Error:[/red] give exactly one of --content or --from")
        raise typer.Exit(1)

    try:
        if from_file is not None:
            content = from_file.expanduser().read_text(encoding="utf-8")
        permissions = parse_mode(mode)
    except OSError as e:
        stderr_console.print(f"[red]Error:[/red] Cannot read {escape(str(from_file))}: {escape(str(e))}")
        raise typer.Exit(1)
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _emit(write_file(path, content, owner=owner, permissions=permissions), parse_vars(var))


def send_run(
    source: str = typer.Argument(..., help="Local file to send"),
    target: str = typer.Argument(..., help="Remote target path"),
    owner: str = typer.Option("root", "--owner", "-o", help="chown argument (root skips chown)"),
    mode: str = typer.Option("0644", "--mode", "-m", help="Octal permissions"),
    var: List[str] = typer.Option([], "--var", help="Template variable key=value (repeatable)"),
):
    """
    Print the command that receives a local file on stdin

    Pipe the source file into the printed command, e.g.:
        filecast send nginx.conf /etc/nginx/nginx.conf > cmd.sh
        ssh host "$(cat cmd.sh)" < nginx.conf
    """
    try:
        permissions = parse_mode(mode)
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _emit(send_file(source, target, owner=owner, permissions=permissions), parse_vars(var))
