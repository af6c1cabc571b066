"""
Provisioning templates

Templates are looked up by name in a factory map that the caller passes in;
there is no process-wide registry.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional

from ...core.exceptions import ConfigError, TemplateNotFoundError
from ..commands import install_packages
from .package import Package


class Template(ABC):
    """Expands into commands on a package"""

    @abstractmethod
    def render(self, package: Package) -> None:
        pass


TemplateFactory = Callable[[Dict[str, Any]], Template]


class PackagesTemplate(Template):
    """Install system packages with apt"""

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        options = options or {}
        packages = options.get("packages", [])
        if isinstance(packages, str):
            packages = packages.split()
        if not packages:
            raise ConfigError("packages template requires a non-empty 'packages' option")
        self.packages = list(packages)

    def render(self, package: Package) -> None:
        package.add_commands("install", install_packages(*self.packages))


def builtin_templates() -> Dict[str, TemplateFactory]:
    """Fresh factory map of the templates shipped with filecast"""
    return {
        "packages": PackagesTemplate,
    }


def expand_template(
    package: Package,
    name: str,
    options: Optional[Dict[str, Any]],
    factories: Mapping[str, TemplateFactory],
) -> None:
    """
    Build the template registered under name and add it to package.

    Raises:
        TemplateNotFoundError: If no factory exists for name
    """
    factory = factories.get(name)
    if factory is None:
        known = ", ".join(sorted(factories)) or "none"
        raise TemplateNotFoundError(f"Unknown template {name!r} (known: {known})")
    package.add_template(name, factory(dict(options or {})))
