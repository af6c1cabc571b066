"""
filecast - remote file deployment command synthesizer

Turns a desired file state into POSIX shell text that reproduces it on a
remote host:
- Inline writes (gzip + base64 payload, staged in a digest-named temp file, moved into place)
- Local file sends (content piped on stdin)
- Packages and provisioning templates applied over SSH
"""

__version__ = "0.1.0"

from .core import (
    RemoteClient,
    ClientConfig,
    load_ssh_config,
)

from .rendering import render

from .domain.commands import (
    FileSpec,
    TransferSpec,
    Command,
    StreamCommand,
    WriteFileCommand,
    SendFileCommand,
    ShellCommand,
    write_file,
    send_file,
    install_packages,
)

from .domain.deploy import (
    Package,
    Template,
    DeployRunner,
    DeployService,
    builtin_templates,
)

__all__ = [
    # Version
    "__version__",
    # Client
    "RemoteClient",
    "ClientConfig",
    "load_ssh_config",
    # Templates
    "render",
    # Commands
    "FileSpec",
    "TransferSpec",
    "Command",
    "StreamCommand",
    "WriteFileCommand",
    "SendFileCommand",
    "ShellCommand",
    "write_file",
    "send_file",
    "install_packages",
    # Deploy
    "Package",
    "Template",
    "DeployRunner",
    "DeployService",
    "builtin_templates",
]
