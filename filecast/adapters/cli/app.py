"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from ...core.logging import setup_logging, get_logger
from .file import register_file_commands
from .deploy import register_deploy_command

logger = get_logger(__name__)

# Create main app
app = typer.Typer(
    name="filecast",
    add_completion=False,
    help="Synthesize and apply shell commands that deploy files to remote hosts",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_file_commands(app)
register_deploy_command(app)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
):
    """
    filecast - remote file deployment

    Use subcommands to perform different operations:
    - write: Print the command writing inline content to a remote file
    - send: Print the command receiving a local file on stdin
    - apply: Run a deploy file against a remote host
    """
    setup_logging(level=log_level, log_file=log_file)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
