"""
Deploy domain module
"""
from .package import Package
from .templates import (
    Template,
    TemplateFactory,
    PackagesTemplate,
    builtin_templates,
    expand_template,
)
from .runner import PlannedCommand, DeployRunner, prepare, plan, execute
from .service import DeployService

__all__ = [
    "Package",
    "Template",
    "TemplateFactory",
    "PackagesTemplate",
    "builtin_templates",
    "expand_template",
    "PlannedCommand",
    "DeployRunner",
    "prepare",
    "plan",
    "execute",
    "DeployService",
]
