"""
Unified exception definitions
"""


class FilecastError(Exception):
    """Base exception class"""
    pass


class ConfigError(FilecastError):
    """Configuration error"""
    pass


class TemplateNotFoundError(ConfigError):
    """Unknown provisioning template name"""
    pass


class ConnectionError(FilecastError):
    """Connection error"""
    pass


class CommandError(FilecastError):
    """Command error"""
    pass


class ValidationError(CommandError):
    """Structurally invalid command (missing path, content or target)"""
    pass


class SourceFileError(CommandError):
    """Local source file missing, unreadable or not hashable"""
    pass


class TemplateError(CommandError):
    """Template could not be rendered"""
    pass


class ExecutionError(FilecastError):
    """Remote command exited with a non-zero code"""

    def __init__(self, message: str, exit_code: int, stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr
