"""Host capabilities the checker consumes.

The core only talks to these narrow interfaces, so tests can swap in plain
in-memory fakes while the CLI wires up the filesystem-backed versions in
``registry.py``.
"""

from pathlib import Path
from typing import Optional, Protocol

from .models import ComponentType, ModuleRecord


class ComponentRegistry(Protocol):
    def resolve(self, component_type: ComponentType, name: str) -> Optional[Path]:
        """Return the registered directory for a component, or None if unregistered."""
        ...


class ModuleRegistry(Protocol):
    def list_names(self) -> set[str]:
        ...

    def get_info(self, name: str) -> ModuleRecord:
        ...


class PackageInfoProvider(Protocol):
    def get_package_name(self, module_name: str) -> str:
        ...

    def get_version(self, module_name: str) -> str:
        ...

    def get_require(self, module_name: str) -> list[str]:
        ...
