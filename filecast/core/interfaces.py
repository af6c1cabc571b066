"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Optional, Tuple


class Executor(ABC):
    """Runs shell text on a target host"""
    
    @abstractmethod
    def exec_with_code(self, cmd: str, stdin: Optional[BinaryIO] = None) -> Tuple[str, str, int]:
        """Execute command, optionally piping a byte stream to its stdin"""
        pass
    
    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection"""
        pass


class ConnectionFactory(ABC):
    """SSH connection factory interface"""
    
    @abstractmethod
    def create(self, params: Dict[str, Any]) -> Executor:
        """Create and connect SSH client"""
        pass
