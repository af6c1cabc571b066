"""
Deploy file parser
"""
from pathlib import Path
from typing import Dict, Any, List, Optional

from ...core.constants import DEFAULT_SEND_OWNER, DEFAULT_SEND_PERMISSIONS
from ...core.exceptions import ConfigError
from ...core.utils import parse_mode
from ...domain.commands import WriteFileCommand, SendFileCommand, write_file, send_file
from ...domain.deploy import Package


def resolve_path_with_home(path: str, home_dir: Optional[str] = None) -> str:
    """
    Resolve path, relative to home_dir if provided.

    Absolute paths, paths starting with ~ and templated paths are not modified.
    """
    if home_dir:
        if path.startswith('/') or path.startswith('~') or path.startswith('{{'):
            return path
        return str(Path(home_dir) / path)
    return path


def _require(item: Dict[str, Any], key: str, section: str) -> Any:
    if key not in item:
        raise ConfigError(f"[[{section}]] entry is missing '{key}'")
    return item[key]


def parse_file_configs(cfg: Dict[str, Any]) -> List[WriteFileCommand]:
    """Parse [[file]] items into inline write commands"""
    return [
        write_file(
            path=_require(item, "path", "file"),
            content=_require(item, "content", "file"),
            owner=item.get("owner", ""),
            permissions=parse_mode(item.get("mode")),
        )
        for item in cfg.get("file", [])
    ]


def parse_send_configs(
    cfg: Dict[str, Any],
    config_file_path: Optional[Path] = None,
) -> List[SendFileCommand]:
    """Parse [[send]] items; relative sources resolve against the deploy file's directory"""
    home_dir = str(config_file_path.parent) if config_file_path else None

    commands = []
    for item in cfg.get("send", []):
        mode = item.get("mode")
        source = _require(item, "source", "send")
        if source.startswith("~"):
            source = str(Path(source).expanduser())
        commands.append(
            send_file(
                source=resolve_path_with_home(source, home_dir),
                target=_require(item, "target", "send"),
                owner=item.get("owner", DEFAULT_SEND_OWNER),
                permissions=DEFAULT_SEND_PERMISSIONS if mode is None else parse_mode(mode),
            )
        )
    return commands


def parse_template_configs(cfg: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Parse [[template]] items into {"name", "options"} dictionaries"""
    items = []
    for item in cfg.get("template", []):
        options = item.get("options", {})
        if not isinstance(options, dict):
            raise ConfigError(f"Template {item.get('name')!r} options must be a table")
        items.append({"name": _require(item, "name", "template"), "options": options})
    return items


def parse_context(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Template variables from the [vars] table"""
    context = cfg.get("vars", {})
    if not isinstance(context, dict):
        raise ConfigError("[vars] must be a table")
    return dict(context)


def build_package(
    cfg: Dict[str, Any],
    config_file_path: Optional[Path] = None,
) -> Package:
    """Package holding the deploy file's write and send commands, in that order"""
    package = Package()

    files = parse_file_configs(cfg)
    if files:
        package.add_commands("files", *files)

    sends = parse_send_configs(cfg, config_file_path)
    if sends:
        package.add_commands("send", *sends)

    return package
