"""
Deploy CLI command
"""
import typer
from pathlib import Path
from typing import Optional, Dict, Any

from rich.markup import escape

from ...core.logging import get_logger, get_stdout_console, get_stderr_console
from ...core.exceptions import (
    FilecastError,
    CommandError,
    ConfigError,
    ConnectionError,
    ExecutionError,
)
from ...core.constants import DEFAULT_SSH_PORT, DEFAULT_SSH_TIMEOUT
from ...core import load_ssh_config
from ...domain.deploy import DeployService, PlannedCommand, builtin_templates
from ...adapters.cli.connection import RemoteConnectionFactory
from ...adapters.cli.prompts import RichPromptProvider
from ...adapters.config.loader import ConfigLoader
from ...adapters.config.deploy_parser import (
    build_package,
    parse_context,
    parse_template_configs,
)

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()
prompt_provider = RichPromptProvider()


def register_deploy_command(app: typer.Typer) -> None:
    """Register apply command directly on the main app"""
    app.command(name="apply")(apply_run)


def _print_planned(item: PlannedCommand) -> None:
    stdout_console.print(f"[cyan]▶[/cyan] {escape(item.log_line)}")


def apply_run(
    config_path: str = typer.Argument(..., help="Deploy file path (TOML)"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the synthesized commands without connecting"
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Override remote host"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Override SSH user"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Override SSH port"),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Override private key path"),
):
    """
    Apply a deploy file to a remote host

    Examples:
        filecast apply deploy.toml
        filecast apply deploy.toml --dry-run
        filecast apply deploy.toml --host 10.0.0.5 --user admin
    """
    try:
        path = Path(config_path).expanduser()
        if not path.exists():
            stderr_console.print(f"[red]Error:[/red] Deploy file not found: {escape(config_path)}")
            raise typer.Exit(1)

        cfg = ConfigLoader().load(
            toml_path=path,
            cli_overrides={"host": host, "user": user, "port": port, "key": key},
        )

        service = DeployService(
            connection_factory=RemoteConnectionFactory(),
            templates=builtin_templates(),
            on_connected=lambda h, p: stdout_console.print(
                f"[green]✓[/green] Connected to [cyan]{escape(str(h))}:{p}[/cyan]"
            ),
            on_command=_print_planned,
            on_complete=lambda count: stdout_console.print(
                f"[green]✓[/green] Deployed {count} command(s)"
            ),
        )

        package = build_package(cfg, path)
        service.expand_templates(package, parse_template_configs(cfg))
        context = parse_context(cfg)

        if dry_run:
            for item in service.plan(package, context):
                stdout_console.print(f"# {escape(item.group)}: {escape(item.log_line)}", emoji=False, highlight=False)
                stdout_console.print(item.shell, markup=False, emoji=False, highlight=False, soft_wrap=True)
            return

        params = _resolve_connection_params(cfg)
        service.deploy(params, package, context)

    except CommandError as e:
        stderr_console.print(f"[red]Command Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ConnectionError as e:
        stderr_console.print(f"[red]Connection Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ExecutionError as e:
        stderr_console.print(f"[red]Execution Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code or 1)
    except FilecastError as e:
        logger.exception("Failed to deploy")
        stderr_console.print(f"[red]Error:[/red] Failed to deploy: {escape(str(e))}")
        raise typer.Exit(1)


def _resolve_connection_params(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve remote connection parameters from the merged configuration.

    Supports:
    - ssh_config: Load configuration from ~/.ssh/config
    - host/user/port/password/key: Direct configuration
    - Missing parameters will prompt user for input
    """
    params: Dict[str, Any] = {}

    # Load from ssh_config if specified
    if "ssh_config" in cfg:
        entry = load_ssh_config(cfg["ssh_config"])
        params.update({k: v for k, v in entry.items() if v is not None})

    for field in ("host", "user", "port", "key", "password"):
        if field in cfg:
            params[field] = cfg[field]
    params["timeout"] = cfg.get("timeout", DEFAULT_SSH_TIMEOUT)

    # Prompt user for missing fields with defaults
    if not params.get("host"):
        params["host"] = prompt_provider.prompt("Enter remote host address")
    if not params.get("user"):
        params["user"] = prompt_provider.prompt("Enter SSH username", default="root")
    try:
        params["port"] = int(params.get("port", DEFAULT_SSH_PORT))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid SSH port: {params.get('port')!r}") from e

    # Prompt for password if neither password nor key is provided
    if not params.get("password") and not params.get("key"):
        password_input = prompt_provider.prompt("Enter SSH password", password=True, default="")
        params["password"] = password_input if password_input else None

    return params
