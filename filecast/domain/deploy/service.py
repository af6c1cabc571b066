"""
Deploy domain service - business logic
"""
from typing import Any, Callable, Dict, List, Mapping, Optional

from ...core.interfaces import ConnectionFactory, Executor
from ...core.exceptions import FilecastError
from ...core.logging import get_logger
from .package import Package
from .runner import DeployRunner, PlannedCommand, plan
from .templates import TemplateFactory, expand_template

logger = get_logger(__name__)


class DeployService:
    """
    Deploy service - pure business logic.
    
    Expands templates, plans the package and runs it over a connection
    created by the injected factory. No direct dependency on CLI or Typer.
    """
    
    def __init__(
        self,
        connection_factory: ConnectionFactory,
        templates: Mapping[str, TemplateFactory],
        on_connected: Optional[Callable[[str, int], None]] = None,
        on_command: Optional[Callable[[PlannedCommand], None]] = None,
        on_complete: Optional[Callable[[int], None]] = None,
    ):
        """
        Initialize deploy service.
        
        Args:
            connection_factory: SSH connection factory
            templates: Template factories by name
            on_connected: Callback when connected (host, port)
            on_command: Callback before each command runs
            on_complete: Callback when all commands ran (command count)
        """
        self.connection_factory = connection_factory
        self.templates = templates
        self.on_connected = on_connected
        self.on_command = on_command
        self.on_complete = on_complete
    
    def expand_templates(
        self,
        package: Package,
        template_items: List[Dict[str, Any]],
    ) -> Package:
        """Expand each {"name": ..., "options": {...}} item onto package"""
        for item in template_items:
            expand_template(package, item["name"], item.get("options"), self.templates)
        return package
    
    def plan(self, package: Package, context: Any) -> List[PlannedCommand]:
        """Render, validate and synthesize without connecting anywhere"""
        return plan(package, context)
    
    def deploy(
        self,
        connection_params: Dict[str, Any],
        package: Package,
        context: Any,
    ) -> List[PlannedCommand]:
        """
        Execute the package on the remote host.
        
        Process:
        1. Plan every command locally (fails before connecting)
        2. Establish SSH connection
        3. Run commands in order, stopping at the first failure
        
        Returns:
            The commands that ran
        
        Raises:
            FilecastError: On validation, connection or execution failure
        """
        planned = plan(package, context)
        logger.debug(f"Planned {len(planned)} command(s)")
        
        client: Optional[Executor] = None
        try:
            client = self.connection_factory.create(connection_params)
            if self.on_connected:
                self.on_connected(
                    connection_params["host"],
                    connection_params.get("port", 22),
                )
            
            DeployRunner(client, on_command=self.on_command).run_planned(planned)
            
            if self.on_complete:
                self.on_complete(len(planned))
            return planned
        
        except FilecastError:
            raise
        except Exception as e:
            raise FilecastError(f"Deploy failed: {e}") from e
        
        finally:
            if client is not None:
                client.close()
