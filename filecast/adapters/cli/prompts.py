"""
Rich-based user prompts
"""
from typing import Optional
from rich.console import Console
from rich.prompt import Prompt

from ...core.logging import get_stdout_console


class RichPromptProvider:
    """Rich-based prompt provider"""
    
    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_stdout_console()
    
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> str:
        """Prompt user for input"""
        if password:
            return Prompt.ask(message, password=True, default=default, console=self.console)
        return Prompt.ask(message, default=default, console=self.console)
