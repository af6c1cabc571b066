"""
Command domain module
"""
from .models import FileSpec, TransferSpec
from .base import Command, StreamCommand
from .file_write import WriteFileCommand, write_file
from .file_send import SendFileCommand, send_file
from .shell import ShellCommand, install_packages

__all__ = [
    "FileSpec",
    "TransferSpec",
    "Command",
    "StreamCommand",
    "WriteFileCommand",
    "write_file",
    "SendFileCommand",
    "send_file",
    "ShellCommand",
    "install_packages",
]
